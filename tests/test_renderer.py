import pytest

from lecturescribe.blocks import (
    Blank,
    Bold,
    BulletList,
    CheckLine,
    Code,
    CodeBlock,
    Heading,
    Italic,
    Label,
    NumberedItem,
    NumberedList,
    Paragraph,
    PlainText,
    Table,
    spans_text,
)
from lecturescribe.models import Note, SourceType
from lecturescribe.renderer import (
    LineKind,
    classify_line,
    clean_key_point,
    parse_inline,
    render_note,
    render_notes,
    split_definition,
    split_transcript,
)


class TestParseInline:
    def test_bold(self):
        assert parse_inline("The **Term** is key") == (
            PlainText("The "),
            Bold("Term"),
            PlainText(" is key"),
        )

    def test_mixed(self):
        assert parse_inline("Use `pip` for *fast* installs") == (
            PlainText("Use "),
            Code("pip"),
            PlainText(" for "),
            Italic("fast"),
            PlainText(" installs"),
        )

    def test_plain(self):
        assert parse_inline("nothing special") == (PlainText("nothing special"),)

    def test_unclosed_markers_stay_plain(self):
        assert parse_inline("2 * 3 = 6") == (PlainText("2 * 3 = 6"),)

    def test_separator_yields_nothing(self):
        assert parse_inline("  ━━━━━  ") == ()
        assert parse_inline("***") == ()

    def test_empty(self):
        assert parse_inline("") == ()

    def test_spans_text(self):
        assert spans_text(parse_inline("a **b** `c` *d*")) == "a b c d"

    def test_repeated_calls_match(self):
        text = "**a** and **b**"
        assert parse_inline(text) == parse_inline(text)


class TestClassifyLine:
    @pytest.mark.parametrize(
        "line,kind",
        [
            ("━━━━━━", LineKind.SEPARATOR),
            ("✓✓✓", LineKind.SEPARATOR),
            ("| a | b |", LineKind.TABLE),
            ("```python", LineKind.FENCE),
            ("### Part", LineKind.HEADING),
            ("#Tag", LineKind.TEXT),
            ("- item", LineKind.BULLET),
            ("• item", LineKind.BULLET),
            ("* item", LineKind.TEXT),
            ("**Main Ideas:**", LineKind.BOLD_LINE),
            ("**Term**: meaning", LineKind.TEXT),
            ("12. step", LineKind.NUMBERED),
            ("12.step", LineKind.TEXT),
            ("✓ done", LineKind.CHECK),
            ("✗ wrong", LineKind.CHECK),
            ("   ", LineKind.BLANK),
            ("plain text", LineKind.TEXT),
        ],
    )
    def test_kinds(self, line, kind):
        assert classify_line(line) is kind


class TestRenderNotes:
    def test_empty(self):
        assert render_notes("") == []
        assert render_notes(None) == []

    def test_bullet_grouping(self):
        assert render_notes("- a\n- b\n\nc") == [
            BulletList(((PlainText("a"),), (PlainText("b"),))),
            Blank(),
            Paragraph((PlainText("c"),)),
        ]

    def test_table(self):
        blocks = render_notes("| Topic | Point |\n| --- | --- |\n| X | Y |")
        assert blocks == [
            Table(
                headers=("Topic", "Point"),
                rows=(((PlainText("X"),), (PlainText("Y"),)),),
            )
        ]

    def test_table_cells_are_inline_parsed(self):
        (table,) = render_notes("| A |\n|:--|\n| **b** |\n| `c` |")
        assert table.headers == ("A",)
        assert table.rows == (((Bold("b"),),), ((Code("c"),),))

    def test_table_of_only_rules_is_dropped(self):
        assert render_notes("|---|---|\nafter") == [Paragraph((PlainText("after"),))]

    def test_table_flushes_bullets(self):
        blocks = render_notes("- a\n| H |\n| v |")
        assert isinstance(blocks[0], BulletList)
        assert isinstance(blocks[1], Table)

    def test_headings(self):
        text = "# One\n## **Two**\n### Three\n#### Four"
        assert render_notes(text) == [
            Heading(1, "One"),
            Heading(2, "Two"),
            Heading(3, "Three"),
            Heading(4, "Four"),
        ]

    def test_code_block(self):
        text = "```python\nx = 1\n  y = *2*\n```\nafter"
        assert render_notes(text) == [
            CodeBlock(lines=("x = 1", "  y = *2*"), language="python"),
            Paragraph((PlainText("after"),)),
        ]

    def test_unclosed_code_block_runs_to_end(self):
        assert render_notes("```\ncode\n# not heading") == [
            CodeBlock(lines=("code", "# not heading"))
        ]

    def test_numbered_list(self):
        assert render_notes("1. First\n2. **Second**") == [
            NumberedList(
                (
                    NumberedItem("1", (PlainText("First"),)),
                    NumberedItem("2", (Bold("Second"),)),
                )
            )
        ]

    def test_bullets_and_numbers_alternate(self):
        blocks = render_notes("- a\n1. b\n- c")
        assert blocks == [
            BulletList(((PlainText("a"),),)),
            NumberedList((NumberedItem("1", (PlainText("b"),)),)),
            BulletList(((PlainText("c"),),)),
        ]

    def test_separator_does_not_break_group(self):
        assert render_notes("- a\n-----\n- b") == [
            BulletList(((PlainText("a"),), (PlainText("b"),))),
        ]

    def test_bold_line_label(self):
        assert render_notes("**Must Remember:**\n- x") == [
            Label("Must Remember"),
            BulletList(((PlainText("x"),),)),
        ]

    def test_bold_definition_line_is_paragraph(self):
        assert render_notes("**Term**: meaning") == [
            Paragraph((Bold("Term"), PlainText(": meaning"))),
        ]

    def test_check_lines(self):
        assert render_notes("✓ Use headings\n✗ Use **bold**") == [
            CheckLine(True, (PlainText("Use headings"),)),
            CheckLine(False, (PlainText("Use "), Bold("bold"))),
        ]

    def test_star_artifact_stripped(self):
        assert render_notes("* stray bullet") == [
            Paragraph((PlainText("stray bullet"),)),
        ]

    def test_trailing_groups_flushed(self):
        blocks = render_notes("text\n- last")
        assert blocks[-1] == BulletList(((PlainText("last"),),))

    def test_deterministic(self):
        text = "# T\n- a\n| x | y |\n|---|---|\n| 1 | 2 |"
        assert render_notes(text) == render_notes(text)


class TestTabHelpers:
    def test_split_transcript(self):
        assert split_transcript("one\n\n\n\ntwo\n\n") == ["one", "two"]
        assert split_transcript("") == []

    def test_clean_key_point(self):
        assert clean_key_point("** Important idea") == "Important idea"
        assert clean_key_point("Plain idea") == "Plain idea"

    def test_split_definition(self):
        assert split_definition("**ATP**: Energy: the currency") == (
            "ATP",
            "Energy: the currency",
        )
        assert split_definition("No separator") == ("No separator", "")

    def test_render_note(self, note_data):
        note = Note.from_dict({**note_data, "id": "n1", "date": "2026-01-02T03:04:05"})
        rendered = render_note(note)
        assert rendered.blocks == (
            Heading(1, "Photosynthesis"),
            Blank(),
            BulletList(((PlainText("Plants make food"),),)),
        )
        assert rendered.transcript == ("First paragraph.", "Second paragraph.")
        assert rendered.key_points == ("Light reactions happen in thylakoids",)
        assert rendered.definitions == (("Chlorophyll", "Green pigment: absorbs light"),)
        assert note.source is SourceType.AUDIO
