from beanledger.comments import (
    BlankLine,
    CommentBlock,
    CommentType,
    build_line_content_map,
    comment_type,
    extract_comments_and_blanks,
    is_directive_line,
)


def test_extract_comments():
    source = b'; Comment 1\noption "title" "Test"\n; Comment 2\n2021-01-01 open Assets:Checking\n'
    comments, _ = extract_comments_and_blanks(source)
    assert len(comments) == 2
    assert comments[0].content == "; Comment 1"
    assert comments[0].line == 1
    assert comments[1].content == "; Comment 2"
    assert comments[1].line == 3


def test_extract_blanks():
    source = (
        'option "title" "Test"\n\n2021-01-01 open Assets:Checking\n\n'
        "2021-01-02 open Assets:Savings"
    )
    _, blanks = extract_comments_and_blanks(source)
    assert [blank.line for blank in blanks] == [2, 4]


def test_trailing_newline_counts_as_blank():
    _, blanks = extract_comments_and_blanks("a\n")
    assert blanks == [BlankLine(2)]


def test_section_comment_type():
    comments, _ = extract_comments_and_blanks(
        "; Section header\n\n2021-01-01 open Assets:Checking\n"
    )
    assert len(comments) == 1
    assert comments[0].type == CommentType.SECTION


def test_standalone_comment_type():
    comments, _ = extract_comments_and_blanks(
        "; Regular comment\n2021-01-01 open Assets:Checking\n"
    )
    assert len(comments) == 1
    assert comments[0].type == CommentType.STANDALONE


def test_hash_line_preservation():
    source = '# Options\n\noption "title" "Test"\n\n# Accounts\n2021-01-01 open Assets:Checking\n'
    comments, _ = extract_comments_and_blanks(source)
    assert len(comments) == 2
    assert comments[0].content == "# Options"
    assert comments[0].line == 1
    assert comments[1].content == "# Accounts"
    assert comments[1].line == 5


def test_indented_comment_is_trimmed():
    comments, _ = extract_comments_and_blanks("   ; indented  \nx")
    assert comments == [CommentBlock(1, "; indented", CommentType.STANDALONE)]


def test_comment_type_at_last_line():
    assert comment_type(0, ["; only"]) == CommentType.STANDALONE
    assert comment_type(0, ["; head", "   "]) == CommentType.SECTION


def test_is_directive_line():
    assert is_directive_line("2021-01-01 open Assets:Checking")
    assert is_directive_line('option "title" "Test"')
    assert is_directive_line('include "other.beancount"')
    assert not is_directive_line("# Options")
    assert not is_directive_line("#vacation")


def test_build_line_content_map():
    comments = [CommentBlock(1, "; a"), CommentBlock(3, "; b")]
    blanks = [BlankLine(2), BlankLine(3)]
    line_map = build_line_content_map(comments, blanks)
    assert line_map[1] == [CommentBlock(1, "; a")]
    assert line_map[2] == [BlankLine(2)]
    assert line_map[3] == [CommentBlock(3, "; b"), BlankLine(3)]
    assert 4 not in line_map