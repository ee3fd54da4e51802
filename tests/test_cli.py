from __future__ import annotations

import io
import logging
import os
from collections import namedtuple

import pytest

from dirsize import cli, drives
from dirsize.report import SEPARATOR


@pytest.fixture
def scenario(tmp_path):
    for rel, size in [("a/x.txt", 100), ("a/y.txt", 50), ("b/z.log", 25), ("w.txt", 10)]:
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(b"x" * size)
    (tmp_path / "empty").mkdir()
    return str(tmp_path)


def test_default_listing(scenario, capsys):
    assert cli.main([scenario]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        f"      0  B  {os.path.join(scenario, 'empty')}",
        f"     25  B  {os.path.join(scenario, 'b')}",
        f"    150  B  {os.path.join(scenario, 'a')}",
        SEPARATOR,
        f"    185  B  {scenario}",
    ]


def test_sort_by_name_reversed(scenario, capsys):
    assert cli.main([scenario, "--sort", "NAME", "-r"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [line.rsplit(os.sep, 1)[-1] for line in lines[:3]] == ["empty", "b", "a"]


def test_top_extensions_block_comes_first(scenario, capsys):
    assert cli.main([scenario, "-e", "1"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[:3] == [
        "Top 1 file types by space usage:",
        "    160  B  txt",
        "",
    ]
    assert lines[-1].endswith(scenario)


def test_top_extensions_reverse_keeps_largest(scenario, capsys):
    assert cli.main([scenario, "-e", "2", "-r"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[1:3] == ["     25  B  log", "    160  B  txt"]


def test_invalid_sort_key_fails_before_scanning(monkeypatch, capsys):
    def boom(*args, **kwargs):
        raise AssertionError("scan should not start")

    monkeypatch.setattr(cli, "scan_path", boom)
    with pytest.raises(SystemExit) as exc:
        cli.main([".", "--sort", "mtime"])
    assert exc.value.code == 2
    assert "invalid sort key 'mtime'" in capsys.readouterr().err


def test_negative_extension_limit_is_rejected(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main([".", "-e", "-1"])
    assert exc.value.code == 2


def test_missing_root_still_prints_total(tmp_path, capsys):
    missing = str(tmp_path / "gone")
    assert cli.main([missing]) == 0
    captured = capsys.readouterr()
    assert captured.out.splitlines() == [f"      0  B  {missing}"]
    assert "Unable to read directory structure" in captured.err


def test_si_units(tmp_path, capsys):
    (tmp_path / "d").mkdir()
    (tmp_path / "d" / "f").write_bytes(b"x" * 1500)
    assert cli.main([str(tmp_path), "--si"]) == 0
    assert capsys.readouterr().out.splitlines()[0].startswith("    1.5 kB  ")


def test_broken_pipe_is_reported_with_exit_status_1(scenario, caplog):
    class Broken(io.StringIO):
        def write(self, s):
            raise BrokenPipeError(32, "Broken pipe")

    args = cli.build_parser().parse_args([scenario])
    with caplog.at_level(logging.ERROR, logger="dirsize"):
        assert cli.run(args, console=cli.make_console(file=Broken())) == 1
    assert "cannot write report" in caplog.text


Part = namedtuple("Part", "device mountpoint fstype opts")
Usage = namedtuple("Usage", "total used free percent")


def test_filesystem_line(scenario, monkeypatch, capsys):
    root = os.path.abspath(os.sep)
    monkeypatch.setattr(drives.psutil, "disk_partitions",
                        lambda all=False: [Part("/dev/sda1", root, "ext4", "rw")])
    monkeypatch.setattr(drives.psutil, "disk_usage",
                        lambda path: Usage(4 * 1024 ** 3, 1024 ** 3, 3 * 1024 ** 3, 25.0))
    assert cli.main([scenario, "--fs"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[-2] == ""
    assert lines[-1] == f"{root} [ext4]: 1.0 GiB used of 4.0 GiB (25.0%), 3.0 GiB free"


def test_find_mountpoint_prefers_longest_prefix(tmp_path, monkeypatch):
    root = os.path.abspath(os.sep)
    monkeypatch.setattr(drives.psutil, "disk_partitions", lambda all=False: [
        Part("/dev/sda1", root, "ext4", "rw"),
        Part("tmpfs", os.path.realpath(tmp_path), "tmpfs", "rw"),
    ])
    part = drives.find_mountpoint(str(tmp_path / "sub"))
    assert part.fstype == "tmpfs"
