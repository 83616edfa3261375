import json
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
CASES = ROOT / "tests" / "cases"


def _run_cli(args, cwd: Path = ROOT):
    env = os.environ.copy()
    pythonpath = env.get("PYTHONPATH", "")
    env["PYTHONPATH"] = str(ROOT / "src") + (os.pathsep + pythonpath if pythonpath else "")
    result = subprocess.run(
        [sys.executable, "-m", "cli", *args],
        cwd=cwd,
        env=env,
        check=False,
        capture_output=True,
        text=True,
    )
    return result


def test_cli_extracts_fragment(tmp_path):
    output_path = tmp_path / "out" / "Pizza.stories.js"
    result = _run_cli(
        [
            "extract",
            str(CASES / "Pizza" / "Readme.md"),
            "--component",
            "./index.tsx",
            "--out",
            str(output_path),
        ]
    )
    assert result.returncode == 0, result.stderr
    assert output_path.exists()
    content = output_path.read_text(encoding="utf-8")
    assert content.startswith("import * as __story_import_0 from 'react'\n")
    assert "  'basic': '<Pizza />',\n" in content
    assert "  './pizza.css': __story_import_4\n" in content
    assert "INFO" in result.stderr
    assert "Skipping export 'Blocky'" in result.stderr


def test_cli_json_to_stdout():
    result = _run_cli(["extract", str(CASES / "Button" / "Readme.md"), "--format", "json"])
    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["__namedExamples"]["primary"] == "<Button primary>Save</Button>"
    assert payload["__storiesScope"] == {
        "./Button": "__story_import_0",
        "../layout": "__story_import_1",
    }
    assert result.stderr == ""


def test_cli_page_without_stories_emits_empty_fragment():
    result = _run_cli(["extract", str(CASES / "Plain" / "Readme.md")])
    assert result.returncode == 0, result.stderr
    assert result.stdout == "export const __namedExamples = {};\nexport const __storiesScope = {};\n"


def test_cli_explicit_stories_file(tmp_path):
    stories = tmp_path / "Custom.stories.jsx"
    stories.write_text(
        "import Card from './Card';\nexport const Basic = () => <Card />;\n", encoding="utf-8"
    )
    result = _run_cli(
        ["extract", str(tmp_path / "Card" / "Readme.md"), "--stories", str(stories)]
    )
    assert result.returncode == 0, result.stderr
    assert "  'basic': '<Card />'\n" in result.stdout
    assert "  './Card': __story_import_0\n" in result.stdout


def test_cli_reports_parse_errors():
    result = _run_cli(["extract", str(CASES / "Broken" / "Readme.md")])
    assert result.returncode == 1
    assert result.stderr.startswith("ERROR ")
    assert "Broken.stories.jsx" in result.stderr
    assert result.stdout == ""


def test_cli_missing_stories_file(tmp_path):
    result = _run_cli(
        [
            "extract",
            str(CASES / "Pizza" / "Readme.md"),
            "--stories",
            str(tmp_path / "Missing.stories.tsx"),
        ]
    )
    assert result.returncode == 1
    assert "Stories file not found" in result.stderr
