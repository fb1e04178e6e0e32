#!/usr/bin/env python3
"""
Unit tests for the style and template registries.
"""

import unittest

from pdf_builder.layout import build_styles
from pdf_builder.models import StyleDef
from pdf_builder.registry import StyleRegistry, TemplateRegistry, default_template_registry
from pdf_builder.templates.base import DeclarativeTemplate, ProceduralTemplate


def _noop(surface, data):
    return None


class TestTemplateRegistry(unittest.TestCase):
    def test_last_registration_wins(self):
        registry = TemplateRegistry()
        registry.register("doc", {"content": [{"type": "text", "content": "first"}]})
        registry.register("doc", {"content": [{"type": "text", "content": "second"}]})

        template = registry.get("doc")
        self.assertIsInstance(template, DeclarativeTemplate)
        self.assertEqual(template.definition["content"][0]["content"], "second")
        self.assertEqual(registry.list(), ["doc"])

    def test_list_keeps_registration_order(self):
        registry = TemplateRegistry()
        for name in ("b", "a", "c", "a"):
            registry.register(name, _noop)
        self.assertEqual(registry.list(), ["b", "a", "c"])
        self.assertEqual(len(registry), 3)

    def test_callables_become_procedural_templates(self):
        registry = TemplateRegistry().register("noop", _noop)
        self.assertIsInstance(registry.get("noop"), ProceduralTemplate)
        self.assertTrue(registry.has("noop"))
        self.assertIn("noop", registry)
        self.assertIsNone(registry.get("missing"))

    def test_register_rejects_unusable_definitions(self):
        with self.assertRaises(TypeError):
            TemplateRegistry().register("bad", 42)

    def test_default_registry_has_builtin_templates(self):
        names = default_template_registry().list()
        for name in ("invoice", "report", "resume", "letter", "contract", "retirement", "retirement_summary"):
            self.assertIn(name, names)

    def test_registries_are_independent(self):
        first = default_template_registry()
        second = default_template_registry()
        first.register("custom", _noop)
        self.assertFalse(second.has("custom"))


class TestTemplateValidation(unittest.TestCase):
    def test_missing_template(self):
        self.assertEqual(TemplateRegistry.validate(None), ["Template is required"])
        self.assertEqual(TemplateRegistry.validate(""), ["Template is required"])

    def test_function_is_valid(self):
        self.assertEqual(TemplateRegistry.validate(_noop), [])

    def test_wrong_kind(self):
        self.assertEqual(TemplateRegistry.validate(42), ["Template must be an object or function"])

    def test_no_sections(self):
        errors = TemplateRegistry.validate({"title": "nothing to draw"})
        self.assertEqual(errors, ["Template must have at least one section (header, content, or footer)"])

    def test_valid_declarative_template(self):
        template = {
            "header": [{"type": "heading", "content": "Title"}],
            "content": [{"type": "text", "content": "Body"}, {"type": "spacer"}],
            "footer": {"type": "line"},
        }
        self.assertEqual(TemplateRegistry.validate(template), [])

    def test_bad_elements_are_reported(self):
        errors = TemplateRegistry.validate({"content": [{"type": "chart"}, "text"]})
        self.assertEqual(len(errors), 2)
        self.assertIn("content[0]", errors[0])
        self.assertIn("content[1]", errors[1])

    def test_validate_never_raises_on_wrapped_template(self):
        registry = TemplateRegistry().register("doc", {"content": [{"type": "text"}]})
        self.assertEqual(TemplateRegistry.validate(registry.get("doc")), [])

    def test_from_json(self):
        parsed = TemplateRegistry.from_json('{"content": [{"type": "text", "content": "hi"}]}')
        self.assertEqual(parsed["content"][0]["content"], "hi")


class TestStyleRegistry(unittest.TestCase):
    def test_mapping_styles_are_coerced(self):
        registry = StyleRegistry().register("note", {"font": "Courier", "fontSize": 9, "fillColor": "#333333"})
        style = registry.get("note")
        self.assertEqual(style, StyleDef(font="Courier", font_size=9, fill_color="#333333"))

    def test_unknown_style_resolves_empty(self):
        self.assertTrue(StyleRegistry().resolve("missing").is_empty())
        self.assertTrue(StyleRegistry().resolve(None).is_empty())

    def test_default_styles(self):
        styles = build_styles()
        self.assertEqual(styles.get("body").font, "Helvetica")
        self.assertEqual(styles.get("title").font_size, 24)
        self.assertEqual(len(styles), 6)


if __name__ == "__main__":
    unittest.main()
