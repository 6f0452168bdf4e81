import pytest

from core import ChangeRecord, DeleteRecord, EditHistory, InvalidRangeError, Line


def _five_lines() -> EditHistory:
    history = EditHistory()
    history.apply_change(1, 5, ["L1", "L2", "L3", "L4", "L5"])
    return history


# ===========================================================
# Change
# ===========================================================

class TestApplyChange:

    def test_change_on_empty_document(self):
        history = EditHistory()
        record = history.apply_change(1, 3, ["A", "B", "C"])
        assert history.texts() == ["A", "B", "C"]
        assert isinstance(record, ChangeRecord)
        assert record.lines_reached == 3
        assert record.last_delete == 0
        assert history.history_pointer == 1
        assert history.log_length == 1

    def test_overwrite_middle_line(self):
        history = EditHistory()
        history.apply_change(1, 3, ["A", "B", "C"])
        history.apply_change(2, 2, ["X"])
        assert history.texts() == ["A", "X", "C"]
        assert history.line_count == 3

    def test_partial_overwrite_extends(self):
        history = EditHistory()
        history.apply_change(1, 2, ["A", "B"])
        history.apply_change(2, 4, ["x", "y", "z"])
        assert history.texts() == ["A", "x", "y", "z"]

    def test_saved_lines_are_shared_with_document(self):
        history = EditHistory()
        record = history.apply_change(1, 2, ["A", "B"])
        assert history.get(1) is record.saved[0]
        assert history.get(2) is record.saved[1]

    def test_accepts_line_objects(self):
        history = EditHistory()
        line = Line("keep")
        history.apply_change(1, 1, [line])
        assert history.get(1) is line

    def test_records_last_delete(self):
        history = _five_lines()
        history.apply_delete(1, 1)
        record = history.apply_change(1, 1, ["new"])
        assert record.last_delete == 2

    @pytest.mark.parametrize("ind1, ind2, payload", [
        (0, 1, ["a", "b"]),
        (2, 1, []),
        (1, 2, ["only one"]),
        (3, 3, ["gap"]),
    ])
    def test_contract_violations_raise(self, ind1, ind2, payload):
        history = EditHistory()
        history.apply_change(1, 1, ["a"])
        with pytest.raises(InvalidRangeError):
            history.apply_change(ind1, ind2, payload)
        assert history.log_length == 1
        assert history.texts() == ["a"]


# ===========================================================
# Delete
# ===========================================================

class TestApplyDelete:

    def test_delete_middle(self):
        history = _five_lines()
        record = history.apply_delete(2, 3)
        assert history.texts() == ["L1", "L4", "L5"]
        assert isinstance(record, DeleteRecord)
        assert [line.text for line in record.saved] == ["L1", "L4", "L5"]
        assert record.lines_reached == 3
        assert history.last_delete == 2

    def test_delete_past_end_is_clamped(self):
        history = _five_lines()
        history.apply_delete(4, 99)
        assert history.texts() == ["L1", "L2", "L3"]

    def test_out_of_range_delete_still_logged(self):
        history = EditHistory()
        history.apply_change(1, 3, ["a", "b", "c"])
        record = history.apply_delete(10, 12)
        assert history.texts() == ["a", "b", "c"]
        assert history.log_length == 2
        assert history.history_pointer == 2
        assert [line.text for line in record.saved] == ["a", "b", "c"]

    def test_zero_zero_is_noop(self):
        history = _five_lines()
        record = history.apply_delete(0, 0)
        assert history.line_count == 5
        assert record.lines_reached == 5
        assert history.log_length == 2

    def test_zero_start_deletes_from_first_line(self):
        history = _five_lines()
        record = history.apply_delete(0, 2)
        assert history.texts() == ["L3", "L4", "L5"]
        assert (record.ind1, record.ind2) == (0, 2)

    def test_reversed_range_removes_nothing(self):
        history = _five_lines()
        history.apply_delete(3, 2)
        assert history.line_count == 5
        assert history.log_length == 2

    def test_delete_on_empty_document(self):
        history = EditHistory()
        history.apply_delete(1, 1)
        assert history.line_count == 0
        assert history.log_length == 1

    def test_negative_index_rejected(self):
        history = _five_lines()
        with pytest.raises(InvalidRangeError):
            history.apply_delete(-1, 2)
        assert history.log_length == 1

    def test_snapshot_shares_lines(self):
        history = _five_lines()
        first = history.get(1)
        record = history.apply_delete(2, 2)
        assert record.saved[0] is first


# ===========================================================
# Print
# ===========================================================

class TestPrintRange:

    def test_out_of_range_placeholder(self):
        history = EditHistory()
        history.apply_change(1, 3, ["A", "B", "C"])
        assert history.print_range(1, 4) == ["A", "B", "C", "."]

    def test_zero_index_placeholder(self):
        history = EditHistory()
        assert history.print_range(0, 0) == ["."]

    def test_empty_range(self):
        history = _five_lines()
        assert history.print_range(3, 2) == []

    def test_fully_out_of_range(self):
        history = _five_lines()
        assert history.print_range(7, 9) == [".", ".", "."]

    def test_negative_index_placeholder(self):
        history = EditHistory()
        history.apply_change(1, 1, ["A"])
        assert history.print_range(-1, 1) == [".", ".", "A"]
        assert history.print_range(-3, -2) == [".", "."]


# ===========================================================
# Undo / redo / reconstruct
# ===========================================================

class TestUndoRedo:

    def test_delete_then_undo_restores(self):
        history = _five_lines()
        history.apply_delete(2, 3)
        assert history.texts() == ["L1", "L4", "L5"]
        history.undo(1)
        assert history.texts() == ["L1", "L2", "L3", "L4", "L5"]
        history.redo(1)
        assert history.texts() == ["L1", "L4", "L5"]

    def test_change_then_undo(self):
        history = EditHistory()
        history.apply_change(1, 3, ["A", "B", "C"])
        history.apply_change(2, 2, ["X"])
        history.undo(1)
        assert history.texts() == ["A", "B", "C"]

    def test_undo_everything_empties_document(self):
        history = _five_lines()
        history.apply_change(6, 6, ["L6"])
        assert history.undo(10) == 2
        assert history.line_count == 0
        assert history.history_pointer == 0
        assert history.log_length == 2

    def test_redo_past_end_is_clamped(self):
        history = _five_lines()
        history.undo(1)
        assert history.redo(5) == 1
        assert history.history_pointer == 1
        assert history.line_count == 5

    def test_undo_on_empty_history(self):
        history = EditHistory()
        assert history.undo(3) == 0
        assert history.history_pointer == 0

    def test_negative_count_rejected(self):
        history = _five_lines()
        with pytest.raises(InvalidRangeError):
            history.undo(-1)

    def test_replay_from_delete_checkpoint(self):
        history = _five_lines()
        history.apply_delete(1, 2)                 # L3 L4 L5
        history.apply_change(1, 1, ["x"])          # x L4 L5
        history.apply_change(3, 4, ["y", "z"])     # x L4 y z
        history.apply_change(2, 2, ["w"])          # x w y z
        history.undo(1)
        assert history.texts() == ["x", "L4", "y", "z"]
        history.undo(1)
        assert history.texts() == ["x", "L4", "L5"]
        history.undo(1)
        assert history.texts() == ["L3", "L4", "L5"]
        history.redo(3)
        assert history.texts() == ["x", "w", "y", "z"]

    def test_replay_shrinks_document_on_undo(self):
        history = EditHistory()
        history.apply_change(1, 2, ["a", "b"])
        history.apply_change(3, 5, ["c", "d", "e"])
        history.undo(1)
        assert history.texts() == ["a", "b"]

    def test_undo_across_delete_to_change(self):
        history = EditHistory()
        history.apply_change(1, 3, ["a", "b", "c"])
        history.apply_change(2, 2, ["B"])
        history.apply_delete(1, 1)
        history.apply_change(1, 1, ["q"])
        history.undo(2)
        assert history.texts() == ["a", "B", "c"]
        history.redo(2)
        assert history.texts() == ["q", "c"]

    def test_reconstruct_is_idempotent(self):
        history = _five_lines()
        history.apply_delete(2, 2)
        history.apply_change(1, 1, ["z"])
        history.reconstruct(2)
        first = history.lines
        history.reconstruct(2)
        assert history.lines == first

    def test_reconstruct_out_of_range_raises(self):
        history = EditHistory()
        with pytest.raises(IndexError):
            history.reconstruct(1)


# ===========================================================
# Seek / commit
# ===========================================================

class TestSeekCommit:

    def test_seek_does_not_commit(self):
        history = _five_lines()
        history.apply_delete(1, 1)
        history.seek(1)
        assert history.line_count == 5
        assert history.materialized_pointer == 1
        assert history.history_pointer == 2

    def test_mutation_after_seek_applies_at_committed_cursor(self):
        history = _five_lines()
        history.apply_delete(1, 1)
        history.seek(0)
        history.apply_change(1, 1, ["new"])
        assert history.texts() == ["new", "L3", "L4", "L5"]
        assert history.log_length == 3

    def test_commit_moves_both_cursors(self):
        history = _five_lines()
        history.apply_delete(1, 1)
        history.commit(1)
        assert history.history_pointer == 1
        assert history.materialized_pointer == 1
        assert history.can_redo


# ===========================================================
# Wipe
# ===========================================================

class TestWipe:

    def test_change_after_undo_wipes_redo(self):
        history = _five_lines()
        history.apply_change(1, 1, ["a"])
        history.apply_change(1, 1, ["b"])
        history.undo(2)
        history.apply_change(2, 2, ["X"])
        assert history.log_length == 2
        assert not history.can_redo
        assert history.redo(1) == 0
        assert history.texts() == ["L1", "X", "L3", "L4", "L5"]

    def test_delete_after_undo_wipes_redo(self):
        history = _five_lines()
        history.apply_change(6, 6, ["L6"])
        history.undo(1)
        history.apply_delete(1, 1)
        assert history.log_length == 2
        assert history.texts() == ["L2", "L3", "L4", "L5"]

    def test_wipe_recomputes_last_delete_from_change(self):
        history = _five_lines()
        history.apply_delete(1, 1)                 # index 2
        history.apply_change(1, 1, ["a"])          # last_delete 2
        history.apply_delete(1, 1)                 # index 4
        history.undo(1)
        history.apply_change(1, 1, ["b"])
        record = history.log.entry(history.log_length - 1)
        assert record.last_delete == 2

    def test_wipe_recomputes_last_delete_from_delete(self):
        history = _five_lines()
        history.apply_delete(1, 1)
        history.apply_change(1, 1, ["a"])
        history.undo(1)
        record = history.apply_change(1, 1, ["b"])
        assert record.last_delete == 2

    def test_wipe_to_empty_log_resets_last_delete(self):
        history = EditHistory()
        history.apply_delete(0, 0)
        history.undo(1)
        record = history.apply_change(1, 1, ["a"])
        assert record.last_delete == 0
        assert history.log_length == 1

    def test_wipe_releases_redo_entries(self):
        history = _five_lines()
        history.apply_change(1, 1, ["gone"])
        history.undo(1)
        dropped = history.wipe_redo()
        assert len(dropped) == 1
        assert dropped[0].saved[0].text == "gone"
        assert history.log_length == 1
