import pytest

from oscsh.parser import (
    ParsedCommand,
    ParseError,
    find_pipe,
    find_redirection,
    scan,
    tokenize,
)


class TestTokenize:
    def test_runs_of_spaces_and_background(self):
        assert tokenize("a  b   &") == (["a", "b"], True)

    def test_empty_line(self):
        assert tokenize("") == ([], False)

    def test_blank_line(self):
        assert tokenize("    ") == ([], False)

    def test_no_background(self):
        assert tokenize("ls -l /tmp") == (["ls", "-l", "/tmp"], False)

    def test_ampersand_anywhere(self):
        assert tokenize("sleep & 5") == (["sleep", "5"], True)

    def test_ampersand_must_be_whole_token(self):
        assert tokenize("echo a&b") == (["echo", "a&b"], False)

    def test_operators_kept(self):
        assert tokenize("ls | wc -l") == (["ls", "|", "wc", "-l"], False)

    def test_token_limit(self):
        tokens, _ = tokenize(" ".join(str(i) for i in range(100)))
        assert len(tokens) == 64
        assert tokens[-1] == "63"

    def test_custom_token_limit(self):
        assert tokenize("a b c d", max_args=2) == (["a", "b"], False)


class TestFindPipe:
    def test_no_pipe(self):
        assert find_pipe(["ls", "-l"]) is None

    def test_first_pipe(self):
        assert find_pipe(["a", "|", "b", "|", "c"]) == 1


class TestFindRedirection:
    def test_output(self):
        assert find_redirection(["ls", ">", "out.txt"]) == (["ls"], None, "out.txt")

    def test_input(self):
        assert find_redirection(["sort", "<", "in.txt"]) == (["sort"], "in.txt", None)

    def test_none(self):
        assert find_redirection(["ls", "-a"]) == (["ls", "-a"], None, None)

    def test_first_operator_wins(self):
        args, input_file, output_file = find_redirection(["cat", "<", "in", ">", "out"])
        assert args == ["cat"]
        assert input_file == "in"
        assert output_file is None

    def test_trailing_tokens_dropped(self):
        assert find_redirection(["ls", ">", "out", "extra"]) == (["ls"], None, "out")

    def test_missing_target(self):
        with pytest.raises(ParseError, match="missing redirection target"):
            find_redirection(["ls", ">"])


class TestScan:
    def test_simple(self):
        cmd = scan(["ls", "-l"])
        assert cmd == ParsedCommand(["ls", "-l"])
        assert not cmd.is_pipeline
        assert cmd.left == ["ls", "-l"]
        assert cmd.right == []

    def test_background_flag_carried(self):
        assert scan(["sleep", "5"], background=True).background

    def test_pipeline_split(self):
        cmd = scan(["ls", "-l", "|", "wc", "-l"])
        assert cmd.is_pipeline
        assert cmd.pipe_index == 2
        assert cmd.left == ["ls", "-l"]
        assert cmd.right == ["wc", "-l"]

    def test_pipeline_ignores_redirection(self):
        cmd = scan(["cat", "|", "sort", ">", "out"])
        assert cmd.is_pipeline
        assert cmd.output_file is None
        assert cmd.right == ["sort", ">", "out"]

    def test_redirection(self):
        cmd = scan(["echo", "hi", ">", "out.txt"])
        assert cmd.args == ["echo", "hi"]
        assert cmd.output_file == "out.txt"
        assert cmd.input_file is None

    def test_missing_left_side(self):
        with pytest.raises(ParseError):
            scan(["|", "wc"])

    def test_missing_right_side(self):
        with pytest.raises(ParseError):
            scan(["ls", "|"])

    def test_missing_command_before_redirection(self):
        with pytest.raises(ParseError):
            scan([">", "out.txt"])
