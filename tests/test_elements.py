import pytest

from pdf_builder.generator import DocumentGenerator
from pdf_builder.surface import Surface


@pytest.fixture
def text_calls(monkeypatch):
    """Record (text, font, size) for every Surface.text call."""
    calls = []
    original = Surface.text

    def spy(self, text, x=None, y=None, **options):
        calls.append((text, self.current_font, self.current_font_size))
        return original(self, text, x, y, **options)

    monkeypatch.setattr(Surface, "text", spy)
    return calls


def codes(diagnostics):
    return [d.code for d in diagnostics]


def test_heading_end_to_end(text_calls):
    generator = DocumentGenerator()
    generator.register_template(
        "greeting",
        {"content": [{"type": "heading", "content": "Hello {{name}}", "props": {"level": 1}}]},
    )

    result = generator.create_document("greeting", {"name": "Ada"})

    assert result.rendered
    assert result.diagnostics == []
    assert text_calls == [("Hello Ada", "Helvetica-Bold", 22.0)]
    # base font restored after the heading
    assert result.surface.current_font == "Helvetica"
    assert result.surface.current_font_size == 12
    assert result.pdf_bytes().startswith(b"%PDF")


@pytest.mark.parametrize("level, size", [(1, 22.0), (3, 18.0), (6, 12.0)])
def test_heading_size_scales_with_level(text_calls, generator, open_surface, level, size):
    generator.renderer.render_element(open_surface, {"type": "heading", "content": "H", "level": level}, {})
    assert text_calls[-1] == ("H", "Helvetica-Bold", size)


def test_style_applied_in_order(monkeypatch, generator, open_surface):
    order = []
    for name in ("font", "font_size", "fill_color", "stroke_color"):
        original = getattr(Surface, name)

        def spy(self, value, _name=name, _original=original):
            order.append(_name)
            return _original(self, value)

        monkeypatch.setattr(Surface, name, spy)

    generator.register_style(
        "boxed",
        {"font": "Courier", "fontSize": 9, "fillColor": "#333333", "strokeColor": "#ff0000"},
    )
    diagnostics = generator.renderer.render_element(
        open_surface, {"type": "text", "content": "styled", "style": "boxed"}, {}
    )

    assert diagnostics == []
    assert order == ["font", "font_size", "fill_color", "stroke_color"]
    assert open_surface.current_font == "Courier"
    assert open_surface.current_font_size == 9
    assert open_surface.current_fill_color == "#333333"
    assert open_surface.current_stroke_color == "#ff0000"


def test_registered_body_style_applied(text_calls, generator, open_surface):
    generator.register_style("body", {"font": "Helvetica", "fontSize": 12, "fillColor": "#000000"})
    open_surface.font("Courier").font_size(20).fill_color("#ff0000")

    generator.renderer.render_element(open_surface, {"type": "text", "content": "x", "style": "body"}, {})

    assert text_calls == [("x", "Helvetica", 12.0)]
    assert open_surface.current_fill_color == "#000000"


def test_table_without_rows_draws_nothing(text_calls, generator, open_surface):
    start = (open_surface.x, open_surface.y)

    diagnostics = generator.renderer.render_element(
        open_surface, {"type": "table", "content": {"headers": ["A", "B"]}}, {}
    )

    assert codes(diagnostics) == ["table_invalid"]
    assert all(d.level == "warning" for d in diagnostics)
    assert text_calls == []
    assert (open_surface.x, open_surface.y) == start


def test_table_with_empty_headers_is_invalid(generator, open_surface):
    diagnostics = generator.renderer.render_element(
        open_surface, {"type": "table", "content": {"headers": [], "rows": [["x"]]}}, {}
    )
    assert codes(diagnostics) == ["table_invalid"]


def test_table_rows_are_interpolated(text_calls, generator, open_surface):
    table = {
        "type": "table",
        "content": {
            "headers": ["Item", "Qty"],
            "rows": [["{{item}}", 2], {"Item": "Mapped", "Qty": 5}, "not a row"],
        },
    }
    start_y = open_surface.y

    diagnostics = generator.renderer.render_element(open_surface, table, {"item": "Widget"})

    drawn = [call[0] for call in text_calls]
    assert drawn == ["Item", "Qty", "Widget", "2", "Mapped", "5"]
    assert codes(diagnostics) == ["table_row_invalid"]
    # header row plus two data rows
    assert open_surface.y == pytest.approx(start_y + 3 * 20)


def test_missing_image_is_a_warning(generator, open_surface, tmp_path):
    diagnostics = generator.renderer.render_element(
        open_surface, {"type": "image", "content": str(tmp_path / "missing.png")}, {}
    )
    assert codes(diagnostics) == ["image_not_found"]
    assert diagnostics[0].level == "warning"


def test_image_path_is_interpolated(generator, open_surface, tmp_path, png_bytes):
    logo = tmp_path / "logo.png"
    logo.write_bytes(png_bytes)
    start_y = open_surface.y

    diagnostics = generator.renderer.render_element(
        open_surface, {"type": "image", "content": "{{logo}}", "width": 120}, {"logo": str(logo)}
    )

    assert diagnostics == []
    assert open_surface.y == pytest.approx(start_y + 60)


def test_unknown_element_does_not_stop_rendering(text_calls):
    generator = DocumentGenerator().register_template(
        "mixed",
        {"content": [{"type": "chart", "content": "?"}, {"type": "text", "content": "after"}]},
    )

    result = generator.create_document("mixed", {})

    assert result.rendered
    assert codes(result.diagnostics) == ["unknown_element"]
    assert [call[0] for call in text_calls] == ["after"]


def test_malformed_heading_does_not_drop_siblings(text_calls):
    generator = DocumentGenerator().register_template(
        "headline",
        {"content": [{"type": "heading", "content": "Big", "level": "big"}, {"type": "text", "content": "after"}]},
    )

    result = generator.create_document("headline", {})

    assert codes(result.diagnostics) == ["element_failed"]
    assert "heading" in result.diagnostics[0].message
    assert [call[0] for call in text_calls] == ["after"]
    assert result.pdf_bytes().startswith(b"%PDF")


def test_list_requires_array(generator, open_surface):
    diagnostics = generator.renderer.render_element(open_surface, {"type": "list", "content": "one item"}, {})
    assert codes(diagnostics) == ["list_invalid"]


def test_numbered_list_with_nested_items(text_calls, generator, open_surface):
    element = {"type": "list", "content": ["{{first}}", ["nested"], "last"], "listType": "numbered"}
    diagnostics = generator.renderer.render_element(open_surface, element, {"first": "one"})
    assert diagnostics == []
    assert [call[0] for call in text_calls] == ["one", "nested", "last"]


def test_line_leaves_cursor(generator, open_surface):
    start = open_surface.y
    diagnostics = generator.renderer.render_element(open_surface, {"type": "line", "startX": 60, "endX": 200}, {})
    assert diagnostics == []
    assert open_surface.y == start


def test_spacer_moves_cursor_by_height(generator, open_surface):
    start = open_surface.y
    generator.renderer.render_element(open_surface, {"type": "spacer", "height": 42}, {})
    assert open_surface.y == pytest.approx(start + 42)


def test_element_failure_becomes_error(generator, open_surface):
    generator.register_style("broken", {"fillColor": "not-a-colour"})
    diagnostics = generator.renderer.render_element(
        open_surface, {"type": "text", "content": "x", "style": "broken"}, {}
    )
    assert codes(diagnostics) == ["element_failed"]
    assert diagnostics[0].level == "error"
