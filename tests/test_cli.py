import pytest

from substitution_errors import InvalidBaseError, SubstitutionMatrixError
from substitution_tool import build_parser, main, read_observations


@pytest.fixture
def observations_file(tmp_path):
    path = tmp_path / "observations.txt"
    lines = ["# ref sub", ""] + ["A G"] * 10 + ["A C"] * 5 + ["A T"] * 2
    path.write_text("\n".join(lines) + "\n")
    return path


class TestParser:
    """Tests for command line parsing."""

    def test_requires_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_verbose_in_logging_group(self):
        groups = {group.title: [action.dest for action in group._group_actions]
                  for group in build_parser()._action_groups}
        assert groups["LOGGING"] == ["verbose"]

    def test_verbose_choices(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--verbose", "2", "decode", "1b1b1b1b1b"])

    def test_decode_args(self):
        args = build_parser().parse_args(["decode", "4b1b1b1b1b"])
        assert args.command == "decode"
        assert args.encoded == "4b1b1b1b1b"


class TestReadObservations:
    """Tests for the observations file format."""

    def test_skips_comments_and_blanks(self, observations_file):
        observations = list(read_observations(str(observations_file)))
        assert len(observations) == 17
        assert observations[0] == (ord('A'), ord('G'))

    def test_malformed_line(self, tmp_path):
        path = tmp_path / "bad.txt"
        path.write_text("A G\nACG\n")
        with pytest.raises(SubstitutionMatrixError, match="line 2"):
            list(read_observations(str(path)))


class TestCommands:
    """Tests for the encode and decode commands."""

    def test_encode(self, observations_file, capsys):
        assert main(["encode", str(observations_file)]) == 0
        output = capsys.readouterr().out
        assert "encoded: 4b1b1b1b1b" in output
        assert "A:GCTN" in output
        assert "a:GCTN" in output

    def test_decode(self, capsys):
        assert main(["--verbose", "1", "decode", "1b1b1b1b1b"]) == 0
        output = capsys.readouterr().out.splitlines()
        assert output[0] == "encoded: 1b1b1b1b1b"
        assert output[1:6] == ["A:CGTN", "C:AGTN", "G:ACTN", "T:ACGN", "N:ACGT"]

    def test_decode_rejects_bad_hex(self):
        with pytest.raises(SubstitutionMatrixError, match="not valid hex"):
            main(["decode", "zz"])

    def test_decode_rejects_wrong_length(self):
        with pytest.raises(SubstitutionMatrixError):
            main(["decode", "1b1b"])

    def test_encode_rejects_non_ascii_base(self, tmp_path):
        path = tmp_path / "non_ascii.txt"
        path.write_text("A é\n", encoding="utf-8")
        with pytest.raises(InvalidBaseError):
            main(["encode", str(path)])
