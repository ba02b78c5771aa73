import json
import os
import shutil
import tempfile

import pytest

from sitescan.cli.main import build_parser, main

SOURCE = "\n".join(
    [
        "package p;",
        "class A {",
        "    int x;",
        "    void m() {",
        "        this.x = 1;",
        "        new Object();",
        "    }",
        "}",
        "",
    ]
)


@pytest.fixture
def sourceDir():
    root = tempfile.mkdtemp()
    with open(os.path.join(root, "A.java"), "w") as f:
        f.write(SOURCE)
    yield root
    shutil.rmtree(root)


def test_scan_writes_json(sourceDir, capsys):
    assert main(["scan", sourceDir]) == 0
    document = json.loads(capsys.readouterr().out)
    assert document["methodDeclarations"] == {"<p.A: void m()>": [4, 10, 11]}
    assert document["heapAllocations"] == {"p.A.m/new java.lang.Object/0": [6, 13, 19]}
    assert document["fieldAccesses"] == {"<p.A: int x>": [[5, 14, 15]]}


def test_scan_output_file(sourceDir):
    target = os.path.join(sourceDir, "out.json")
    assert main(["scan", sourceDir, "-o", target]) == 0
    with open(target) as f:
        assert "p.A.m/new java.lang.Object/0" in json.load(f)["heapAllocations"]


def test_scan_keep_going_reports_failures(sourceDir, capsys):
    missing = os.path.join(sourceDir, "Missing.java")
    assert main(["scan", "--keep-going", missing, sourceDir]) == 1
    document = json.loads(capsys.readouterr().out)
    assert [failure["sourcefile"] for failure in document["failures"]] == [missing]
    assert "<p.A: void m()>" in document["methodDeclarations"]


def test_scan_missing_file_fails(sourceDir):
    assert main(["scan", os.path.join(sourceDir, "Missing.java")]) == 1


def test_invalid_tab_width(sourceDir):
    assert main(["scan", "--tab-width", "0", sourceDir]) == 1


def test_stats(sourceDir, capsys):
    assert main(["stats", sourceDir]) == 0
    lines = dict(line.split() for line in capsys.readouterr().out.splitlines())
    assert lines["units"] == "1"
    assert lines["heapAllocations"] == "1"
    assert lines["fieldAccesses"] == "1"


def test_dump(sourceDir, capsys):
    assert main(["dump", os.path.join(sourceDir, "A.java")]) == 0
    out = capsys.readouterr().out
    assert "CompilationUnit" in out
    assert "NewClass" in out


def test_options():
    args = build_parser().parse_args(["scan", "--shared-scanner", "--stale-method-context", "x.java"])
    assert args.shared_scanner
    assert args.stale_method_context
    assert args.tab_width == 8
