import unittest
from dataclasses import replace
from datetime import timedelta

from schedcore.crud import CrudStore, MemoryStore
from schedcore.editor import CommitPolicy, ShiftEditor
from schedcore.errors import RemoteError
from schedcore.sample_data import get_sample_shifts


class FailingStore(CrudStore):
    """Store that holds the fixtures but refuses every mutation."""

    def __init__(self):
        self.items = get_sample_shifts()

    def get(self):
        return list(self.items)

    def add(self, item):
        raise RemoteError("service unavailable", 503)

    def update(self, item):
        raise RemoteError("service unavailable", 503)

    def remove(self, item):
        raise RemoteError("service unavailable", 503)


class TestShiftEditor(unittest.TestCase):
    def setUp(self):
        self.store = MemoryStore(get_sample_shifts(), allocate_ids=True, entity_name='shift')
        self.editor = ShiftEditor(self.store)

    def test_starts_closed(self):
        self.assertFalse(self.editor.is_open)
        self.assertIsNone(self.editor.active_shift)

    def test_open_commit_close(self):
        shift = self.store.find(0)
        ok, _ = self.editor.open_editor(shift)
        self.assertTrue(ok)
        self.assertTrue(self.editor.is_open)

        edited = replace(shift, note="cover front desk", end=shift.end + timedelta(hours=1))
        ok, message = self.editor.commit(edited)
        self.assertTrue(ok, message)
        self.assertEqual(self.store.find(0), edited)
        self.assertEqual(self.editor.active_shift, edited)
        self.assertTrue(self.editor.is_open)

        self.editor.close_editor()
        self.assertFalse(self.editor.is_open)
        self.assertIsNone(self.editor.session.active_shift)

    def test_active_shift_is_a_private_copy(self):
        shift = self.store.find(0)
        self.editor.open_editor(shift)
        shift.note = "changed outside"
        self.editor.active_shift.note = "changed through property"
        self.assertIsNone(self.editor.active_shift.note)
        self.assertIsNone(self.store.find(0).note)

    def test_commit_while_closed_is_rejected(self):
        ok, _ = self.editor.commit(replace(self.store.find(0), note="x"))
        self.assertFalse(ok)
        self.assertIsNone(self.store.find(0).note)

    def test_commit_for_another_shift_is_rejected(self):
        self.editor.open_editor(self.store.find(0))
        self.editor.open_editor(self.store.find(1))
        ok, _ = self.editor.commit(replace(self.store.find(0), note="stale"))
        self.assertFalse(ok)
        self.assertIsNone(self.store.find(0).note)
        self.assertEqual(self.editor.active_shift.id, 1)

    def test_commit_with_end_before_start_is_rejected(self):
        shift = self.store.find(0)
        self.editor.open_editor(shift)
        ok, message = self.editor.commit(replace(shift, end=shift.start - timedelta(minutes=1)))
        self.assertFalse(ok)
        self.assertIn("before it starts", message)
        self.assertEqual(self.store.find(0), shift)
        self.assertEqual(self.editor.active_shift, shift)

    def test_missing_shift_fails_by_default(self):
        orphan = replace(self.store.find(0), id=42)
        self.editor.open_editor(orphan)
        ok, message = self.editor.commit(replace(orphan, note="late"))
        self.assertFalse(ok)
        self.assertEqual(message, "shift 42 not found")
        self.assertEqual(len(self.store.get()), 2)
        self.assertTrue(self.editor.is_open)
        self.assertIsNone(self.editor.active_shift.note)

    def test_missing_shift_is_added_under_add_policy(self):
        editor = ShiftEditor(self.store, CommitPolicy.ADD)
        orphan = replace(self.store.find(0), id=42)
        editor.open_editor(orphan)
        ok, _ = editor.commit(replace(orphan, note="re-added"))
        self.assertTrue(ok)
        self.assertEqual([s.id for s in self.store.get()], [0, 1, 2])
        self.assertEqual(editor.active_shift.id, 2)
        self.assertEqual(editor.active_shift.note, "re-added")

    def test_store_failure_leaves_state_unchanged(self):
        editor = ShiftEditor(FailingStore())
        shift = get_sample_shifts()[0]
        editor.open_editor(shift)
        with self.assertLogs('schedcore.editor', level='WARNING'):
            ok, message = editor.commit(replace(shift, note="x"))
        self.assertFalse(ok)
        self.assertEqual(message, "service unavailable")
        self.assertEqual(editor.active_shift, shift)

        ok, _ = editor.remove_active()
        self.assertFalse(ok)
        self.assertTrue(editor.is_open)

    def test_remove_active_deletes_and_closes(self):
        self.editor.open_editor(self.store.find(1))
        ok, _ = self.editor.remove_active()
        self.assertTrue(ok)
        self.assertFalse(self.editor.is_open)
        self.assertEqual([s.id for s in self.store.get()], [0])

    def test_remove_while_closed_is_rejected(self):
        ok, _ = self.editor.remove_active()
        self.assertFalse(ok)
        self.assertEqual(len(self.store.get()), 2)


if __name__ == "__main__":
    unittest.main(verbosity=2)
