import sys


def _run(main, argv):
    argv_bak = list(sys.argv)
    sys.argv = argv
    try:
        main()
    finally:
        sys.argv = argv_bak


def test_validate_boards_smoke(tmp_path, capsys):
    from scripts.validate_boards import main

    boards = tmp_path / "boards.list"
    boards.write_text("# comment\n1|3|0|2|3\n\n1|3|0|2|2\n", encoding="utf-8")
    xsb_dir = tmp_path / "xsb"
    xsb_dir.mkdir()
    (xsb_dir / "set.txt").write_text(
        "; first\n#####\n#@$.#\n#####\n\n#####\n#$@.#\n#####\n", encoding="utf-8"
    )
    _run(main, ["validate", "--list", str(boards), "--xsb", str(xsb_dir), "--check_deadlock"])
    out = capsys.readouterr().out
    assert "valid: 2, skipped: 2" in out
    assert "deadlocked in the initial state" in out


def test_render_board_smoke(tmp_path, capsys):
    from scripts.render_board import main

    out_png = tmp_path / "board.png"
    _run(main, ["render", "--moves", "dr", "--out", str(out_png)])
    out = capsys.readouterr().out
    assert out_png.exists()
    assert "solved=True" in out
