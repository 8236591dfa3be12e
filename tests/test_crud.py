import threading
import unittest
from datetime import datetime, timedelta, timezone

from schedcore.crud import MemoryStore, next_id
from schedcore.errors import DuplicateIdentity, NotFound
from schedcore.models import Employee, Shift

UTC = timezone.utc


def shift(shift_id, hour=9, employee_id=0):
    start = datetime(2019, 6, 27, hour, tzinfo=UTC)
    return Shift(id=shift_id, supervisor_id=1, employee_id=employee_id,
                 start=start, end=start + timedelta(hours=8))


class TestNextId(unittest.TestCase):
    def test_empty_collection_starts_at_zero(self):
        self.assertEqual(next_id([]), 0)

    def test_one_past_the_maximum(self):
        self.assertEqual(next_id([3, 0, 7, 2]), 8)

    def test_missing_ids_are_ignored(self):
        self.assertEqual(next_id([None, 4]), 5)
        self.assertEqual(next_id([None]), 0)


class TestMemoryStoreAllocating(unittest.TestCase):
    def setUp(self):
        self.store = MemoryStore(allocate_ids=True, entity_name='shift')

    def test_first_added_gets_zero(self):
        self.store.add(shift(None))
        self.assertEqual([s.id for s in self.store.get()], [0])

    def test_store_overrides_supplied_id(self):
        self.store.add(shift(5)).add(shift(5))
        self.assertEqual([s.id for s in self.store.get()], [0, 1])

    def test_ids_follow_the_maximum_not_the_count(self):
        store = MemoryStore([shift(0), shift(9)], allocate_ids=True)
        added = store.add(shift(None)).last()
        self.assertEqual(added.id, 10)

    def test_add_appends_in_call_order(self):
        for hour in (15, 7, 11):
            self.store.add(shift(None, hour=hour))
        self.assertEqual([s.start.hour for s in self.store.get()], [15, 7, 11])
        self.assertEqual(self.store.last().start.hour, 11)

    def test_concurrent_adds_get_distinct_ids(self):
        threads = [threading.Thread(target=self.store.add, args=(shift(None),)) for _ in range(20)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        self.assertEqual(sorted(s.id for s in self.store.get()), list(range(20)))


class TestMemoryStoreCallerIds(unittest.TestCase):
    def setUp(self):
        self.store = MemoryStore([
            Employee(id=0, email="a@x.org", first="Ann", last="Ames"),
            Employee(id=4, email="b@x.org", first="Bo", last="Byrd"),
        ], entity_name='employee')

    def test_duplicate_id_is_rejected(self):
        with self.assertRaises(DuplicateIdentity):
            self.store.add(Employee(id=4, email="c@x.org", first="Cy", last="Cole"))
        self.assertEqual(len(self.store.get()), 2)

    def test_missing_id_is_allocated(self):
        added = self.store.add(Employee(id=None, email="c@x.org", first="Cy", last="Cole")).last()
        self.assertEqual(added.id, 5)

    def test_update_replaces_wholesale(self):
        self.store.update(Employee(id=4, email="new@x.org", first="Bo", last="Byrd"))
        updated = self.store.find(4)
        self.assertEqual(updated.email, "new@x.org")
        self.assertEqual([e.id for e in self.store.get()], [0, 4])

    def test_update_missing_raises_not_found(self):
        with self.assertRaises(NotFound) as ctx:
            self.store.update(Employee(id=9, email="", first="", last=""))
        self.assertEqual(ctx.exception.entity_id, 9)

    def test_remove_is_idempotent(self):
        target = self.store.find(0)
        self.store.remove(target)
        self.store.remove(target)
        self.assertEqual([e.id for e in self.store.get()], [4])

    def test_snapshots_are_isolated(self):
        snapshot = self.store.get()
        snapshot[0].first = "Changed"
        snapshot.append(snapshot[1])
        self.assertEqual(self.store.find(0).first, "Ann")
        self.assertEqual(len(self.store.get()), 2)

    def test_added_item_is_copied(self):
        emp = Employee(id=7, email="d@x.org", first="Di", last="Dunn")
        self.store.add(emp)
        emp.first = "Changed"
        self.assertEqual(self.store.find(7).first, "Di")


if __name__ == "__main__":
    unittest.main(verbosity=2)
