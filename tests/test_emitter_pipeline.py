import json

import pytest

from analyzer import catalog_declarations, collect_examples
from emitter import (
    EmitOptions,
    PrintError,
    Printer,
    emit_fragment,
    js_string,
    merge_fragment,
    render_example,
)
from frontend import run_frontend
from transformer import ExportOptions, StoriesFragment, export_stories


def _parse(source: str, *, source_name: str = "Render.stories.tsx"):
    return run_frontend(source, source_name=source_name)


def test_print_statement_appends_terminator():
    result = _parse("const pizza = 'pizza'\nimport Container from './Container'\n")
    printer = Printer(result.source)
    declaration, import_statement = result.program["body"]

    assert printer.print_statement(declaration) == "const pizza = 'pizza';"
    assert printer.print_statement(import_statement) == "import Container from './Container';"


def test_print_statement_keeps_existing_terminator_and_blocks():
    result = _parse("const pizza = 'pizza';\nfunction bake() {\n  return pizza;\n}\n")
    printer = Printer(result.source)
    declaration, function = result.program["body"]

    assert printer.print_statement(declaration) == "const pizza = 'pizza';"
    assert printer.print_statement(function) == "function bake() {\n  return pizza;\n}"


def test_print_strips_type_syntax():
    result = _parse("const nums = ['eins', 'zwei', 'polizei'] as const\n")
    printer = Printer(result.source)
    assert printer.print_statement(result.program["body"][0]) == "const nums = ['eins', 'zwei', 'polizei'];"


def test_print_requires_range():
    with pytest.raises(PrintError):
        Printer("const a = 1;").print({"type": "Identifier", "name": "a"})


def test_render_example_with_and_without_prelude():
    result = _parse(
        "import Container from './Container'\n"
        "const label = 'Hi';\n"
        "export const basic = () => <Container>{label}</Container>\n"
    )
    printer = Printer(result.source)
    catalog = catalog_declarations(result.program)
    example = collect_examples(result.program).examples[0]

    assert render_example(printer, [], example.body) == "<Container>{label}</Container>"
    assert render_example(printer, catalog, example.body) == (
        "import Container from './Container';\n"
        "const label = 'Hi';\n"
        "\n"
        "<Container>{label}</Container>"
    )


def test_js_string_escapes():
    assert js_string("plain") == "'plain'"
    assert js_string("it's") == "'it\\'s'"
    assert js_string("a\nb") == "'a\\nb'"
    assert js_string("back\\slash") == "'back\\\\slash'"
    assert js_string("line\u2028sep") == "'line\\u2028sep'"


def test_emit_empty_fragment():
    result = emit_fragment(StoriesFragment())
    assert result.source == "export const __namedExamples = {};\nexport const __storiesScope = {};\n"
    assert result.statements == ()


def _container_fragment():
    result = _parse(
        "import Container from './Container';\n"
        "export const basic = () => <Container><Button /></Container>\n"
    )
    return export_stories(
        result.program,
        result.source,
        ExportOptions(documentation_path="/Pizza/Readme.md", unit_import_path="./index.tsx"),
    )


def test_emit_fragment_js():
    result = emit_fragment(_container_fragment())

    assert result.source == (
        "import * as __story_import_0 from './Container'\n"
        "export const __namedExamples = {\n"
        "  'basic': 'import Container from \\'./Container\\';\\n\\n<Container><Button /></Container>'\n"
        "};\n"
        "export const __storiesScope = {\n"
        "  './Container': __story_import_0\n"
        "};\n"
    )
    assert result.statements == ("import * as __story_import_0 from './Container'",)


def test_emit_fragment_json():
    result = emit_fragment(_container_fragment(), EmitOptions(format="json"))
    payload = json.loads(result.source)

    assert payload["__namedExamples"] == {
        "basic": "import Container from './Container';\n\n<Container><Button /></Container>"
    }
    assert payload["__storiesScope"] == {"./Container": "__story_import_0"}
    assert payload["imports"] == [{"source": "./Container", "alias": "__story_import_0", "index": 0}]
    assert payload["diagnostics"] == []


def test_emit_fragment_rejects_unknown_format():
    with pytest.raises(ValueError):
        emit_fragment(StoriesFragment(), EmitOptions(format="yaml"))


def test_merge_fragment_places_fragment_first():
    module_source = "const layoutProps = { __namedExamples, __storiesScope };\n"
    merged = merge_fragment(module_source, _container_fragment())

    assert merged.startswith("import * as __story_import_0 from './Container'\n")
    assert merged.endswith("\n" + module_source)
    assert merged.index("export const __storiesScope") < merged.index("const layoutProps")
