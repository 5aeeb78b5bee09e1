from __future__ import annotations

import unittest

from lazybranch.branch_list import Entry, ItemStore
from lazybranch.errors import BackendError, NoSelection, OutOfRange, user_facing_error


class ItemStoreTests(unittest.TestCase):
    def test_replace_swaps_the_whole_list(self) -> None:
        store = ItemStore([Entry("refs/heads/a", "a")])
        store.replace([Entry("refs/heads/b", "b"), Entry("refs/heads/c", "c")])

        self.assertEqual(len(store), 2)
        self.assertEqual([entry.display_name for entry in store], ["b", "c"])
        self.assertEqual(store.get(1).identifier, "refs/heads/c")

    def test_get_outside_the_store_is_out_of_range(self) -> None:
        store = ItemStore([Entry("refs/heads/a", "a")])

        with self.assertRaises(OutOfRange):
            store.get(1)
        with self.assertRaises(IndexError):
            store.get(-1)


class ErrorFormattingTests(unittest.TestCase):
    def test_hint_is_appended(self) -> None:
        error = BackendError("git merge failed", hint="CONFLICT in a.txt")

        self.assertEqual(str(error), "git merge failed (CONFLICT in a.txt)")
        self.assertEqual(user_facing_error(error), "git merge failed: CONFLICT in a.txt")

    def test_message_only(self) -> None:
        self.assertEqual(user_facing_error(NoSelection("no branch selected")), "no branch selected")


if __name__ == "__main__":
    unittest.main()
