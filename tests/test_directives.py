"""
Directive splitter tests

Tests marker recognition, argument extraction with nested parentheses,
prose preservation and failure on unterminated argument lists.
"""

import pytest

from gqldocs.lib.directives import split_directives, marker_find
from gqldocs.lib.brackets import MismatchedBracketsError
from gqldocs.models.annotations import Annotation, SplitResult


class TestPlainText:
    """Test descriptions without markers"""

    @pytest.mark.parametrize("text", [
        "",
        "Just prose.",
        "Parens (like these) stay put.",
        "Mail user@example.com for access",
        "Meet @ noon",
        "Trailing at @",
        "Punctuation @! is not a name",
    ])
    def test_unchanged(self, text):
        """No @word marker means identical description and no annotations"""
        result = split_directives(text)
        assert result == SplitResult(description=text, annotations=[])

    def test_idempotent(self):
        """Splitting an already clean description changes nothing"""
        first = split_directives('Deprecated. @deprecated(reason: "old") Use new field.')
        second = split_directives(first.description)

        assert second.description == first.description
        assert second.annotations == []


class TestArgumentLists:
    """Test markers followed by a parenthesized argument list"""

    def test_deprecated_example(self):
        """Marker and its argument list are excised; prose around them kept"""
        result = split_directives('Deprecated. @deprecated(reason: "old") Use new field.')

        assert result.description == "Deprecated.  Use new field."
        assert result.annotations == [
            Annotation(name="deprecated", argument_text='reason: "old"')
        ]

    def test_nested_parentheses_preserved(self):
        """Call-like sub-expressions survive inside argument_text"""
        result = split_directives("@tag(expr: f(g(x)), y) rest")

        assert result.annotations == [Annotation(name="tag", argument_text="expr: f(g(x)), y")]
        assert result.description == " rest"

    def test_empty_argument_list(self):
        """'()' gives empty argument text, not None"""
        result = split_directives("@flag() set")

        assert result.annotations[0].argument_text == ""
        assert result.description == " set"

    def test_only_first_group_belongs_to_marker(self):
        """A second parenthesized group stays in the prose"""
        result = split_directives("@x(a)(b)")

        assert result.annotations == [Annotation(name="x", argument_text="a")]
        assert result.description == "(b)"

    def test_prose_parentheses_untouched(self):
        """Parentheses not attached to a marker are prose"""
        result = split_directives("Returns (maybe) a value @x(y)")

        assert result.description == "Returns (maybe) a value "
        assert result.annotations == [Annotation(name="x", argument_text="y")]

    def test_space_before_paren_means_no_arguments(self):
        """'@name (' is an argumentless marker followed by prose"""
        result = split_directives("@deprecated (see docs)")

        assert result.annotations == [Annotation(name="deprecated")]
        assert result.description == "(see docs)"

    def test_multiline_argument(self):
        """Argument lists may span lines"""
        result = split_directives("Top\n@config(\n  depth: 2\n)\nBottom")

        assert result.annotations == [Annotation(name="config", argument_text="\n  depth: 2\n")]
        assert result.description == "Top\n\nBottom"


class TestArgumentless:
    """Test markers without argument lists"""

    def test_leading_marker_with_space(self):
        """The single space after the name is part of the marker"""
        result = split_directives("@internal some text")

        assert result.annotations == [Annotation(name="internal")]
        assert result.description == "some text"

    def test_marker_at_end_of_text(self):
        """A marker running to the end of text is valid"""
        result = split_directives("Text @final")

        assert result.annotations == [Annotation(name="final", argument_text=None)]
        assert result.description == "Text "

    def test_marker_followed_by_punctuation(self):
        """Punctuation after the name stays in the prose"""
        result = split_directives("See @link.")

        assert result.annotations == [Annotation(name="link")]
        assert result.description == "See ."

    def test_marker_followed_by_newline(self):
        """A newline is not consumed with the marker"""
        result = split_directives("Line one\n@beta\nLine two")

        assert result.annotations == [Annotation(name="beta")]
        assert result.description == "Line one\n\nLine two"

    def test_name_is_word_characters(self):
        """Names stop at the first non-word character"""
        result = split_directives("@snake_case_2-suffix")

        assert result.annotations == [Annotation(name="snake_case_2")]
        assert result.description == "-suffix"

    def test_name_accepts_unicode_letters(self):
        """Names follow Unicode word characters, so accented letters stay in the name"""
        result = split_directives("@café(au: lait) @naïve done")

        assert result.annotations == [
            Annotation(name="café", argument_text="au: lait"),
            Annotation(name="naïve"),
        ]
        assert result.description == " done"

    def test_unicode_letter_before_at_is_not_a_marker(self):
        """An @ glued to a non-ASCII letter is ordinary text"""
        result = split_directives("mañana@host")

        assert result.annotations == []
        assert result.description == "mañana@host"


class TestMultipleMarkers:
    """Test sequences of markers"""

    def test_order_preserved(self):
        """Annotations come out in order of appearance"""
        result = split_directives("@first(1) middle @second(2) end @third")

        assert [a.name for a in result.annotations] == ["first", "second", "third"]
        assert [a.argument_text for a in result.annotations] == ["1", "2", None]
        assert result.description == " middle  end "

    def test_space_separated_markers(self):
        """Each marker consumes one trailing space"""
        result = split_directives("@a @b @c")

        assert [a.name for a in result.annotations] == ["a", "b", "c"]
        assert result.description == ""

    def test_extra_whitespace_kept(self):
        """Whitespace beyond the single separator remains in the prose"""
        result = split_directives("@a  @b")

        assert [a.name for a in result.annotations] == ["a", "b"]
        assert result.description == " "

    def test_adjacent_markers(self):
        """'@a@b' is two markers; the cursor starts a fresh search"""
        result = split_directives("@a@b")

        assert result.annotations == [Annotation(name="a"), Annotation(name="b")]
        assert result.description == ""

    def test_marker_right_after_argument_list(self):
        """A marker directly after ')' is recognized"""
        result = split_directives("@a(1)@b(2)")

        assert result.annotations == [
            Annotation(name="a", argument_text="1"),
            Annotation(name="b", argument_text="2"),
        ]
        assert result.description == ""

    def test_email_between_markers(self):
        """An @ glued to a word is prose even among real markers"""
        result = split_directives("@owner(team) contact ops@example.com @beta")

        assert [a.name for a in result.annotations] == ["owner", "beta"]
        assert result.description == " contact ops@example.com "

    def test_prose_order_preserved(self):
        """Concatenated prose keeps the original relative order"""
        result = split_directives("one @x two @y(z) three @w four")
        assert result.description == "one two  three four"


class TestMalformed:
    """Test unterminated argument lists"""

    def test_unterminated_argument_list(self):
        """An argument list that never closes raises"""
        with pytest.raises(MismatchedBracketsError):
            split_directives("unterminated @foo(bar")

    def test_unterminated_with_nested_close(self):
        """Inner closes do not balance the outer open"""
        with pytest.raises(MismatchedBracketsError):
            split_directives("@foo(bar(baz) and more")

    def test_error_reports_open_position(self):
        """The error points at the unbalanced parenthesis"""
        with pytest.raises(MismatchedBracketsError) as excinfo:
            split_directives("ok @good(1) then @bad(oops")

        assert excinfo.value.start == len("ok @good(1) then @bad")


class TestMarkerFind:
    """Test marker detection directly"""

    def test_marker_at_cursor_after_word_character(self):
        """The cursor is a fresh start of the remaining text"""
        match = marker_find("@foo@bar", 4)
        assert match is not None
        assert match.group(1) == "bar"

    def test_marker_after_word_character_elsewhere(self):
        """Away from the cursor, '@' glued to a word is not a marker"""
        assert marker_find("foo@bar", 0) is None

    def test_suffix_group(self):
        """group(2) reports '(' or ' ' or None"""
        assert marker_find("@a(x)", 0).group(2) == "("
        assert marker_find("@a x", 0).group(2) == " "
        assert marker_find("@a", 0).group(2) is None
