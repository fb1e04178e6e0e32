import pytest

from pdf_builder.generator import DocumentGenerator
from pdf_builder.models import Diagnostic, GeneratorConfig, RenderResult
from pdf_builder.surface import SurfaceClosedError

SIMPLE = {"content": [{"type": "text", "content": "Hi {{who}}"}]}


def test_unregistered_template_returns_open_surface(generator):
    result = generator.create_document("nope", {"who": "x"})

    assert isinstance(result, RenderResult)
    assert not result.rendered
    assert not result.surface.finalized
    # caller can still draw and finish the document
    result.surface.text("drawn by hand")
    assert result.surface.end().startswith(b"%PDF")


def test_no_template_name_returns_open_surface(generator):
    result = generator.create_document(None)
    assert not result.rendered
    assert not result.surface.finalized


def test_registered_template_is_finalized_once(generator):
    generator.register_template("simple", SIMPLE)
    result = generator.create_document("simple", {"who": "there"})

    assert result.rendered
    assert result.surface.finalized
    assert result.pdf_bytes().startswith(b"%PDF")
    with pytest.raises(SurfaceClosedError):
        result.surface.end()
    with pytest.raises(SurfaceClosedError):
        result.surface.text("too late")


def test_output_file_is_written(generator, tmp_path):
    target = tmp_path / "nested" / "simple.pdf"
    generator.register_template("simple", SIMPLE)

    result = generator.create_document("simple", {"who": "file"}, target)

    assert result.output_path == target
    assert target.read_bytes().startswith(b"%PDF")


def test_failing_template_reports_error_and_finalizes(generator):
    def explode(surface, data):
        surface.text("partial")
        raise KeyError("total")

    generator.register_template("explode", explode)
    result = generator.create_document("explode", {})

    assert result.rendered
    assert result.surface.finalized
    assert [d.code for d in result.errors] == ["template_failed"]


def test_procedural_template_diagnostics_are_collected(generator):
    generator.register_template("warns", lambda surface, data: [Diagnostic("custom", "heads up")])
    result = generator.create_document("warns", {})
    assert [d.code for d in result.warnings] == ["custom"]


def test_render_template_unknown_name(generator, open_surface):
    diagnostics = generator.render_template(open_surface, "ghost", {})
    assert [d.code for d in diagnostics] == ["template_not_found"]
    assert not open_surface.finalized


def test_registration_chains(generator):
    returned = generator.register_template("a", SIMPLE).register_style("loud", {"fontSize": 30})
    assert returned is generator
    assert generator.get_style("loud").font_size == 30


def test_apply_style_returns_surface(generator, open_surface):
    assert generator.apply_style(open_surface, "title") is open_surface
    assert open_surface.current_font_size == 24


def test_generators_do_not_share_registrations():
    first = DocumentGenerator().register_template("only-here", SIMPLE)
    second = DocumentGenerator()
    assert first.templates.has("only-here")
    assert not second.templates.has("only-here")


def test_options_override_config():
    generator = DocumentGenerator(GeneratorConfig(page_size="A4"), fontSize=10, margin=30)
    assert generator.config.page_size == "A4"
    assert generator.config.font_size == 10
    assert generator.config.margin == 30

    surface = generator.create_document(None).surface
    assert surface.margins.left == 30
    assert round(surface.page_width) == 595


def test_validated_config_coerces_numbers():
    config = GeneratorConfig.from_dict({"fontSize": "11", "margin": 0, "lineHeight": 1.2}).validated()
    assert (config.font_size, config.margin, config.line_height) == (11.0, 0.0, 1.2)


@pytest.mark.parametrize("settings", [{"fontSize": "big"}, {"margin": -5}, {"lineHeight": True}, {"fontSize": float("inf")}])
def test_validated_config_rejects_bad_numbers(settings):
    with pytest.raises(ValueError):
        GeneratorConfig.from_dict(settings).validated()


def test_validate_template_passthrough():
    assert DocumentGenerator.validate_template(SIMPLE) == []
    assert DocumentGenerator.validate_template(None) == ["Template is required"]


@pytest.mark.parametrize(
    "shortcut, data",
    [
        ("invoice", {"invoice": {"number": "INV-1"}, "items": [{"description": "Work", "quantity": 1, "rate": 10, "amount": 10}]}),
        ("report", {"title": "Quarterly", "content": [{"heading": "Intro", "text": "Body"}]}),
        ("resume", {"name": "Ada"}),
        ("retirement", {"name": "Ada", "age": 40}),
        ("letter", {"recipient": "Bob", "body": "Hello"}),
        ("contract", {"title": "Services", "parties": ["A", "B"], "terms": ["Pay on time"]}),
    ],
)
def test_classmethod_shortcuts(shortcut, data, tmp_path):
    result = getattr(DocumentGenerator, shortcut)(data, tmp_path / f"{shortcut}.pdf")
    assert result.template_name == shortcut
    assert result.rendered
    assert result.errors == []
    assert (tmp_path / f"{shortcut}.pdf").read_bytes().startswith(b"%PDF")
