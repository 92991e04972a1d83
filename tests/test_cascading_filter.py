"""Tests for the exam -> subject -> chapter dropdown cascade."""

from preppal.application.filters.cascading_filter import (
    ALL,
    CascadingFilter,
    FilterMode,
    filter_children,
    visible_rows,
)

SUBJECTS = [
    {"id": "s-phy", "exam_id": "e-jee", "name": "Physics"},
    {"id": "s-chem", "exam_id": "e-jee", "name": "Chemistry"},
    {"id": "s-bio", "exam_id": "e-neet", "name": "Biology"},
]
CHAPTERS = [
    {"id": "c-mech", "subject_id": "s-phy", "name": "Mechanics"},
    {"id": "c-opt", "subject_id": "s-phy", "name": "Optics"},
    {"id": "c-cell", "subject_id": "s-bio", "name": "Cells"},
]


def _ids(items):
    return [item["id"] for item in items]


def test_no_parent_is_empty_in_strict_mode_and_everything_in_loose_mode():
    assert filter_children(SUBJECTS, "exam_id", ALL, FilterMode.STRICT) == []
    assert filter_children(SUBJECTS, "exam_id", ALL, FilterMode.LOOSE) == SUBJECTS


def test_children_are_matched_on_parent_id():
    assert _ids(filter_children(SUBJECTS, "exam_id", "e-jee", FilterMode.STRICT)) == ["s-phy", "s-chem"]
    assert filter_children(SUBJECTS, "exam_id", "e-unknown", FilterMode.LOOSE) == []


def test_changing_exam_clears_subject_and_chapter_that_no_longer_fit():
    cascade = CascadingFilter(SUBJECTS, CHAPTERS, mode=FilterMode.STRICT)
    cascade.select_exam("e-jee")
    cascade.select_subject("s-phy")
    cascade.select_chapter("c-mech")

    cascade.select_exam("e-neet")

    assert cascade.selection == {"exam_id": "e-neet", "subject_id": ALL, "chapter_id": ALL}
    assert _ids(cascade.subject_options) == ["s-bio"]
    assert cascade.chapter_options == []


def test_changing_exam_keeps_a_subject_that_still_fits():
    cascade = CascadingFilter(SUBJECTS, CHAPTERS, mode=FilterMode.LOOSE)
    cascade.select_subject("s-phy")
    cascade.select_chapter("c-opt")

    cascade.select_exam("e-jee")

    assert cascade.selection == {"exam_id": "e-jee", "subject_id": "s-phy", "chapter_id": "c-opt"}


def test_subject_outside_selected_exam_is_refused():
    cascade = CascadingFilter(SUBJECTS, CHAPTERS, mode=FilterMode.STRICT)
    cascade.select_exam("e-jee")
    cascade.select_subject("s-bio")
    assert cascade.subject_id == ALL


def test_apply_normalizes_a_whole_selection_top_down():
    cascade = CascadingFilter(SUBJECTS, CHAPTERS, mode=FilterMode.LOOSE)
    selection = cascade.apply(exam_id="e-neet", subject_id="s-phy", chapter_id="c-mech")
    assert selection == {"exam_id": "e-neet", "subject_id": ALL, "chapter_id": ALL}

    selection = cascade.apply(exam_id="e-jee", subject_id="s-phy", chapter_id="c-cell")
    assert selection == {"exam_id": "e-jee", "subject_id": "s-phy", "chapter_id": ALL}


def test_visible_rows_prefers_subject_then_exam():
    rows = [
        {"id": "b1", "subject_id": "s-phy"},
        {"id": "b2", "subject_id": "s-chem"},
        {"id": "b3", "subject_id": "s-bio"},
    ]
    assert _ids(visible_rows(rows, SUBJECTS, subject_id="s-chem")) == ["b2"]
    assert _ids(visible_rows(rows, SUBJECTS, exam_id="e-jee")) == ["b1", "b2"]
    assert _ids(visible_rows(rows, SUBJECTS)) == ["b1", "b2", "b3"]


def test_exam_without_subject_narrows_chapters_in_loose_mode():
    cascade = CascadingFilter(SUBJECTS, CHAPTERS, mode=FilterMode.LOOSE)
    assert _ids(cascade.chapter_options) == ["c-mech", "c-opt", "c-cell"]

    cascade.select_exam("e-neet")
    assert _ids(cascade.chapter_options) == ["c-cell"]

    cascade.select_chapter("c-mech")
    assert cascade.chapter_id == ALL


def test_changing_exam_clears_chapter_chosen_without_subject():
    cascade = CascadingFilter(SUBJECTS, CHAPTERS, mode=FilterMode.LOOSE)
    cascade.select_chapter("c-mech")
    assert cascade.chapter_id == "c-mech"

    cascade.select_exam("e-jee")
    assert cascade.chapter_id == "c-mech"

    cascade.select_exam("e-neet")
    assert cascade.selection == {"exam_id": "e-neet", "subject_id": ALL, "chapter_id": ALL}
