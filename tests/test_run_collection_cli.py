import json

from run_collection import EXIT_FAILURES, EXIT_NOT_FOUND, EXIT_OK, build_parser, run

from conftest import make_case, write_stores


async def test_cli_writes_report_and_returns_exit_code(data_dir, transport, tmp_path):
    write_stores(data_dir, {"A": make_case("A", "/users/42")})
    output = tmp_path / "out" / "report.json"
    args = build_parser().parse_args(
        ["--collection-id", "c1", "--data-dir", str(data_dir), "--output", str(output)]
    )

    assert await run(args, transport=transport) == EXIT_OK
    report = json.loads(output.read_text(encoding="utf-8"))
    assert report["collectionName"] == "Users flow"
    assert report["passed"] == 1
    assert (data_dir / "results.json").exists()


async def test_cli_exit_codes(data_dir, transport, capsys):
    write_stores(data_dir, {"A": make_case("A", "/missing")})

    args = build_parser().parse_args(["--collection-id", "c1", "--data-dir", str(data_dir)])
    assert await run(args, transport=transport) == EXIT_FAILURES
    assert json.loads(capsys.readouterr().out)["failed"] == 1

    args = build_parser().parse_args(["--collection-id", "nope", "--data-dir", str(data_dir)])
    assert await run(args, transport=transport) == EXIT_NOT_FOUND
