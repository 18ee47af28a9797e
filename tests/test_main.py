import json
from pathlib import Path

import pytest

from image_resizer.main import split_options


def test_split_options_keeps_directives_in_order():
    options, tokens = split_options(
        ["--log-level", "debug", "/load", "a.png", "--settings", "s.json", "/resize", "0x0", "Pixel"]
    )
    assert options.log_level == "debug"
    assert options.settings == "s.json"
    assert options.log_cats is None
    assert tokens == ["/load", "a.png", "/resize", "0x0", "Pixel"]


class TestRun:
    @pytest.fixture(autouse=True)
    def _deps(self, tmp_path: Path, monkeypatch):
        pytest.importorskip("pyvips")
        self.Image = pytest.importorskip("PIL.Image")
        self.tmp = tmp_path
        self.settings = tmp_path / "settings.json"
        self.settings.write_text(json.dumps({"program_name": "resizer"}), encoding="utf-8")
        monkeypatch.delenv("IMAGE_RESIZER_LOG_LEVEL", raising=False)
        monkeypatch.delenv("IMAGE_RESIZER_LOG_CATS", raising=False)

    def _run(self, *tokens: str) -> int:
        from image_resizer.main import run

        return run(["image-resizer", "--settings", str(self.settings), *tokens])

    def test_empty_run_exits_zero(self):
        assert self._run() == 0

    def test_load_resize_save(self, capsys):
        src = self.tmp / "in.png"
        self.Image.new("RGB", (10, 8), color=(0, 128, 255)).save(src)
        out = self.tmp / "out.png"

        code = self._run("/load", str(src), "/resize", "0x0", "Scale2x(2)", "/save", str(out))

        assert code == 0
        assert capsys.readouterr().out == "0 0 2 Scale2x\n"
        with self.Image.open(out) as saved:
            assert saved.size == (40, 32)

    def test_unknown_directive_prints_help_with_program_name(self, capsys):
        assert self._run("/frobnicate") == 1
        text = capsys.readouterr().out
        assert text.startswith("resizer [/load <source>]")
        for name in ("Pixel", "Lanczos3", "Scale2x", "Scale3x", "Eagle2x"):
            assert f"  {name}\n" in text

    def test_io_failure_aborts_with_two(self, capsys):
        out = self.tmp / "out.png"
        code = self._run("/load", str(self.tmp / "missing.png"), "/save", str(out))

        assert code == 2
        assert not out.exists()
        assert "Image I/O failed" in capsys.readouterr().err
