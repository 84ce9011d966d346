"""
Segmenter Tests — sentence spans and offsets.
"""

from honestra.segmenter import SentenceSpan, segment


class TestBasicSplitting:

    def test_three_sentences(self):
        spans = segment("Hello world. How are you? Fine!")
        assert [s.text for s in spans] == ["Hello world.", "How are you?", "Fine!"]

    def test_offsets(self):
        text = "Hello world. How are you? Fine!"
        spans = segment(text)
        assert [(s.start_offset, s.end_offset) for s in spans] == [(0, 12), (13, 25), (26, 31)]
        for s in spans:
            assert text[s.start_offset:s.end_offset] == s.text

    def test_indices_are_sequential(self):
        spans = segment("One. Two. Three.")
        assert [s.index for s in spans] == [0, 1, 2]

    def test_trailing_text_becomes_span(self):
        spans = segment("First. second part")
        assert [s.text for s in spans] == ["First.", "second part"]

    def test_newlines_split(self):
        spans = segment("line one\nline two\r\nline three")
        assert [s.text for s in spans] == ["line one", "line two", "line three"]

    def test_no_delimiter_is_single_span(self):
        spans = segment("  just one clause  ")
        assert spans == [SentenceSpan("just one clause", 2, 17, 0)]


class TestEdgeCases:

    def test_empty(self):
        assert segment("") == []

    def test_whitespace_only(self):
        assert segment("   \n\t ") == []

    def test_repeated_sentences_move_forward(self):
        spans = segment("Yes. Yes.")
        assert [(s.start_offset, s.end_offset) for s in spans] == [(0, 4), (5, 9)]

    def test_spans_do_not_overlap(self):
        text = "A cat sat. A cat sat. A dog ran!\nDone"
        spans = segment(text)
        for prev, cur in zip(spans, spans[1:]):
            assert prev.end_offset <= cur.start_offset


class TestMaqaf:
    """The Hebrew maqaf only closes a span in document mode."""

    def test_guard_mode_ignores_maqaf(self):
        spans = segment("היקום מנחה אותנו־זה לא צירוף מקרים")
        assert len(spans) == 1

    def test_document_mode_splits_on_maqaf(self):
        spans = segment("היקום מנחה אותנו־זה לא צירוף מקרים", document_mode=True)
        assert [s.text for s in spans] == ["היקום מנחה אותנו־", "זה לא צירוף מקרים"]
