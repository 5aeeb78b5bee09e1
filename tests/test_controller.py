"""Behavior tests for the branch list controller.

Covers view/cursor/scroll consistency across refreshes, query edits, cursor
moves and resizes, plus intent routing and action gating.
"""

from __future__ import annotations

import unittest

from lazybranch.branch_list import (
    ActionKind,
    ActionRequest,
    Entry,
    EntryFlags,
    Intent,
    IntentKind,
    ListController,
    Motion,
    Partition,
)
from lazybranch.errors import ActionUnavailable, BackendError, NoSelection


def _local(name: str, *, head: bool = False, upstream: bool = False) -> Entry:
    return Entry(
        identifier=f"refs/heads/{name}",
        display_name=name,
        summary=f"commit on {name}",
        flags=EntryFlags(is_head=head, has_upstream=upstream),
        top_commit="0123456789",
    )


def _remote(name: str) -> Entry:
    return Entry(identifier=f"refs/remotes/{name}", display_name=name, summary="remote commit")


class FakeSource:
    def __init__(self, local=(), remote=()) -> None:
        self.entries = {Partition.LOCAL: list(local), Partition.REMOTE: list(remote)}
        self.failing: set[Partition] = set()
        self.calls: list[Partition] = []

    def list_entries(self, partition: Partition) -> list[Entry]:
        self.calls.append(partition)
        if partition in self.failing:
            raise BackendError("git for-each-ref failed", hint="fatal: bad object")
        return list(self.entries[partition])


def _opened(local=(), remote=(), height: int | None = None) -> tuple[ListController, FakeSource]:
    source = FakeSource(local, remote)
    controller = ListController(source)
    controller.open()
    if height is not None:
        controller.resize_viewport(height)
    return controller, source


class ListControllerStateTests(unittest.TestCase):
    def test_open_shows_identity_view_with_first_row_selected(self) -> None:
        controller, _ = _opened([_local("main", head=True), _local("dev")])

        self.assertTrue(controller.visible)
        self.assertEqual([row.source_index for row in controller.filtered_view], [0, 1])
        self.assertEqual(controller.current_selection(), "refs/heads/main")

    def test_query_shrink_clamps_cursor_to_last_row(self) -> None:
        names = ["main", "feature-a", "feature-b", "fix-c", "release"]
        controller, _ = _opened([_local(name) for name in names])
        controller.move_cursor(Motion.END)

        controller.set_query("feature")

        self.assertEqual(len(controller.filtered_view), 2)
        self.assertEqual(controller.cursor.index, 1)
        self.assertEqual(controller.current_selection(), "refs/heads/feature-b")

    def test_query_without_matches_yields_no_selection(self) -> None:
        controller, _ = _opened([_local("main"), _local("dev")])

        controller.set_query("zzz")

        self.assertEqual(controller.filtered_view, ())
        self.assertIsNone(controller.cursor.index)
        self.assertIsNone(controller.current_selection())
        with self.assertRaises(NoSelection):
            controller.resolve_action(ActionKind.CHECKOUT)

    def test_alpha_beta_alphabet_scenario_ranks_alpha_first(self) -> None:
        controller, _ = _opened([_local("alpha"), _local("beta"), _local("alphabet")])

        controller.set_query("al")

        self.assertEqual(controller.current_selection(), "refs/heads/alpha")
        self.assertEqual([row.source_index for row in controller.filtered_view], [0, 2])

    def test_scroll_scenario_offset_follows_cursor_to_last_visible_row(self) -> None:
        controller, _ = _opened([_local(f"branch-{idx:02d}") for idx in range(20)], height=5)

        for _ in range(12):
            controller.move_cursor(Motion.TOWARD_END)

        self.assertEqual(controller.cursor.index, 12)
        self.assertEqual(controller.scroller.offset, 8)

    def test_page_moves_before_first_resize_do_nothing(self) -> None:
        controller, _ = _opened([_local(f"b{idx}") for idx in range(10)])

        self.assertFalse(controller.move_cursor(Motion.PAGE_TOWARD_END))
        self.assertEqual(controller.cursor.index, 0)

    def test_refresh_with_same_entries_keeps_selection(self) -> None:
        entries = [_local(f"b{idx}") for idx in range(6)]
        controller, _ = _opened(entries, height=3)
        controller.move_cursor(Motion.END)
        before = (controller.current_selection(), controller.scroller.offset)

        controller.refresh(entries)

        self.assertEqual((controller.current_selection(), controller.scroller.offset), before)

    def test_refresh_that_shrinks_the_list_clamps_cursor_and_offset(self) -> None:
        controller, _ = _opened([_local(f"b{idx}") for idx in range(10)], height=3)
        controller.move_cursor(Motion.END)

        controller.refresh([_local("b0"), _local("b1")])

        self.assertEqual(controller.cursor.index, 1)
        self.assertEqual(controller.scroller.offset, 0)

    def test_resize_keeps_cursor_inside_viewport(self) -> None:
        controller, _ = _opened([_local(f"b{idx}") for idx in range(20)], height=10)
        controller.move_cursor(Motion.END)

        offset = controller.resize_viewport(4)

        self.assertEqual(offset, 16)
        self.assertTrue(offset <= controller.cursor.index < offset + 4)

    def test_close_preserves_query_and_cursor_until_open(self) -> None:
        controller, _ = _opened([_local("main"), _local("dev"), _local("devops")])
        controller.set_query("dev")
        controller.move_cursor(Motion.TOWARD_END)
        controller.close()

        self.assertFalse(controller.visible)
        self.assertEqual(controller.query, "dev")
        self.assertEqual(controller.cursor.index, 1)

        controller.open()

        self.assertEqual(controller.query, "")
        self.assertFalse(controller.filtering)
        self.assertEqual(controller.cursor.index, 1)

    def test_reveal_after_failed_open_shows_previous_entries(self) -> None:
        controller, source = _opened([_local("main"), _local("dev")])
        controller.move_cursor(Motion.TOWARD_END)
        controller.close()
        source.failing.add(Partition.LOCAL)

        with self.assertRaises(BackendError):
            controller.open()
        self.assertFalse(controller.visible)

        controller.reveal()

        self.assertTrue(controller.visible)
        self.assertEqual(controller.current_selection(), "refs/heads/dev")
        self.assertEqual(len(controller.filtered_view), 2)

    def test_notify_source_changed_reloads_only_while_visible(self) -> None:
        controller, source = _opened([_local("main")])
        source.entries[Partition.LOCAL].append(_local("new"))
        controller.close()
        controller.notify_source_changed()
        self.assertEqual(len(controller.store), 1)

        controller.visible = True
        controller.notify_source_changed()

        self.assertEqual(len(controller.store), 2)

    def test_snapshot_rows_cover_the_viewport(self) -> None:
        controller, _ = _opened([_local(f"b{idx}") for idx in range(8)], height=3)
        controller.move_cursor(Motion.END)

        snapshot = controller.snapshot()

        self.assertEqual(snapshot.offset, 5)
        self.assertEqual([row.display_name for row in snapshot.rows], ["b5", "b6", "b7"])
        self.assertEqual(snapshot.selected_row.display_name, "b7")
        self.assertEqual(snapshot.total, 8)

    def test_snapshot_for_other_height_does_not_touch_scroll_state(self) -> None:
        controller, _ = _opened([_local(f"b{idx}") for idx in range(8)], height=6)
        controller.move_cursor(Motion.END)

        snapshot = controller.snapshot(viewport_height=2)

        self.assertEqual(snapshot.offset, 6)
        self.assertEqual(len(snapshot.rows), 2)
        self.assertEqual(controller.scroller.offset, 2)
        self.assertEqual(controller.viewport_height, 6)

    def test_snapshot_carries_match_positions(self) -> None:
        controller, _ = _opened([_local("main"), _local("feature")])
        controller.set_query("fea")

        row = controller.snapshot(viewport_height=5).rows[0]

        self.assertEqual(row.display_name, "feature")
        self.assertEqual(row.match_positions, frozenset({0, 1, 2}))


class ListControllerPartitionTests(unittest.TestCase):
    def test_toggle_partition_loads_remote_entries_and_sets_has_remotes(self) -> None:
        controller, _ = _opened([_local("main")], [_remote("origin/main")])

        controller.toggle_partition()

        self.assertIs(controller.partition, Partition.REMOTE)
        self.assertTrue(controller.has_remotes)
        self.assertEqual(controller.current_selection(), "refs/remotes/origin/main")

    def test_failed_toggle_leaves_state_untouched(self) -> None:
        controller, source = _opened([_local("main"), _local("dev")])
        controller.move_cursor(Motion.TOWARD_END)
        source.failing.add(Partition.REMOTE)

        with self.assertRaises(BackendError):
            controller.handle_intent(Intent(IntentKind.TOGGLE_PARTITION))

        self.assertIs(controller.partition, Partition.LOCAL)
        self.assertEqual(controller.current_selection(), "refs/heads/dev")
        self.assertEqual(len(controller.store), 2)

    def test_failed_reload_keeps_previous_entries(self) -> None:
        controller, source = _opened([_local("main")])
        source.failing.add(Partition.LOCAL)

        with self.assertRaises(BackendError):
            controller.reload()

        self.assertEqual(controller.current_selection(), "refs/heads/main")

    def test_controller_without_source_keeps_refreshed_entries_on_open(self) -> None:
        controller = ListController()
        controller.refresh([_local("main"), _local("dev")])

        controller.open()

        self.assertEqual(len(controller.filtered_view), 2)


class ListControllerIntentTests(unittest.TestCase):
    def setUp(self) -> None:
        self.controller, self.source = _opened(
            [_local("main", head=True, upstream=True), _local("dev"), _local("feature")],
            [_remote("origin/main"), _remote("origin/dev")],
            height=10,
        )

    def test_hidden_controller_does_not_consume_intents(self) -> None:
        self.controller.close()

        outcome = self.controller.handle_intent(Intent(IntentKind.MOVE_TOWARD_END))

        self.assertFalse(outcome.consumed)
        self.assertEqual(self.controller.cursor.index, 0)

    def test_command_bar_toggle_is_passed_through(self) -> None:
        outcome = self.controller.handle_intent(Intent(IntentKind.COMMAND_BAR))

        self.assertFalse(outcome.consumed)

    def test_motion_intents_move_the_cursor(self) -> None:
        self.controller.handle_intent(Intent(IntentKind.END))
        self.assertEqual(self.controller.cursor.index, 2)
        self.controller.handle_intent(Intent(IntentKind.MOVE_TOWARD_START))
        self.assertEqual(self.controller.cursor.index, 1)
        self.controller.handle_intent(Intent(IntentKind.HOME))
        self.assertEqual(self.controller.cursor.index, 0)

    def test_text_edits_apply_only_in_filter_mode(self) -> None:
        outcome = self.controller.handle_intent(Intent(IntentKind.INSERT_TEXT, text="d"))
        self.assertTrue(outcome.consumed)
        self.assertEqual(self.controller.query, "")

        self.controller.handle_intent(Intent(IntentKind.TOGGLE_FILTER_MODE))
        self.controller.handle_intent(Intent(IntentKind.INSERT_TEXT, text="d"))
        self.controller.handle_intent(Intent(IntentKind.INSERT_TEXT, text="x"))
        self.assertEqual(self.controller.query, "dx")
        self.controller.handle_intent(Intent(IntentKind.DELETE_BACKWARD))
        self.assertEqual(self.controller.query, "d")
        self.assertEqual(self.controller.current_selection(), "refs/heads/dev")

        self.controller.handle_intent(Intent(IntentKind.CLEAR_QUERY))
        self.assertEqual(self.controller.query, "")
        self.assertEqual(len(self.controller.filtered_view), 3)

    def test_exit_filter_mode_keeps_query(self) -> None:
        self.controller.handle_intent(Intent(IntentKind.TOGGLE_FILTER_MODE))
        self.controller.handle_intent(Intent(IntentKind.INSERT_TEXT, text="f"))
        self.controller.handle_intent(Intent(IntentKind.EXIT_FILTER_MODE))

        self.assertFalse(self.controller.filtering)
        self.assertEqual(self.controller.query, "f")

    def test_close_intent_hides_the_list(self) -> None:
        outcome = self.controller.handle_intent(Intent(IntentKind.CLOSE))

        self.assertTrue(outcome.consumed)
        self.assertFalse(self.controller.visible)

    def test_checkout_resolves_request_for_selection(self) -> None:
        self.controller.handle_intent(Intent(IntentKind.MOVE_TOWARD_END))

        outcome = self.controller.handle_intent(Intent(IntentKind.CHECKOUT))

        self.assertEqual(
            outcome.request,
            ActionRequest(
                kind=ActionKind.CHECKOUT,
                partition=Partition.LOCAL,
                identifier="refs/heads/dev",
                display_name="dev",
                top_commit="0123456789",
            ),
        )
        self.assertTrue(self.controller.visible)

    def test_head_branch_actions_report_a_message_instead_of_a_request(self) -> None:
        for kind in (IntentKind.CHECKOUT, IntentKind.MERGE, IntentKind.REBASE, IntentKind.DELETE, IntentKind.COMPARE):
            outcome = self.controller.handle_intent(Intent(kind))
            self.assertTrue(outcome.consumed)
            self.assertIsNone(outcome.request)
            self.assertEqual(outcome.message, "main is the checked-out branch")

    def test_inspect_and_rename_are_allowed_on_head(self) -> None:
        self.assertIsNotNone(self.controller.handle_intent(Intent(IntentKind.RENAME)).request)
        outcome = self.controller.handle_intent(Intent(IntentKind.INSPECT))

        self.assertEqual(outcome.request.kind, ActionKind.INSPECT_TARGET)
        self.assertFalse(self.controller.visible)

    def test_compare_hides_the_list_before_dispatch(self) -> None:
        self.controller.handle_intent(Intent(IntentKind.MOVE_TOWARD_END))

        outcome = self.controller.handle_intent(Intent(IntentKind.COMPARE))

        self.assertEqual(outcome.request.kind, ActionKind.COMPARE)
        self.assertFalse(self.controller.visible)

    def test_rename_and_create_are_local_only(self) -> None:
        self.controller.toggle_partition()

        with self.assertRaises(ActionUnavailable):
            self.controller.resolve_action(ActionKind.RENAME)
        outcome = self.controller.handle_intent(Intent(IntentKind.CREATE))
        self.assertIsNone(outcome.request)
        self.assertEqual(outcome.message, "branches can only be created from the local list")

    def test_create_has_no_target(self) -> None:
        request = self.controller.resolve_action(ActionKind.CREATE)

        self.assertIsNone(request.identifier)
        self.assertIs(request.partition, Partition.LOCAL)

    def test_fetch_requires_remote_partition_with_remotes(self) -> None:
        with self.assertRaises(ActionUnavailable):
            self.controller.resolve_action(ActionKind.FETCH_REMOTES)

        self.controller.toggle_partition()
        self.assertEqual(self.controller.resolve_action(ActionKind.FETCH_REMOTES).kind, ActionKind.FETCH_REMOTES)

        self.source.entries[Partition.REMOTE] = []
        self.controller.reload()
        with self.assertRaises(ActionUnavailable):
            self.controller.resolve_action(ActionKind.FETCH_REMOTES)

    def test_empty_view_actions_report_no_selection(self) -> None:
        self.controller.set_query("zzz")

        outcome = self.controller.handle_intent(Intent(IntentKind.MERGE))

        self.assertIsNone(outcome.request)
        self.assertEqual(outcome.message, "no branch selected")


class CompleteActionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.controller, self.source = _opened(
            [_local("main", head=True), _local("dev")],
            [_remote("origin/main"), _remote("origin/topic")],
        )

    def test_local_checkout_merge_and_rebase_close_the_list(self) -> None:
        for kind in (ActionKind.CHECKOUT, ActionKind.MERGE, ActionKind.REBASE):
            self.controller.open()
            self.controller.complete_action(ActionRequest(kind=kind, partition=Partition.LOCAL, identifier="refs/heads/dev"))
            self.assertFalse(self.controller.visible)

    def test_remote_checkout_switches_to_local_partition(self) -> None:
        self.controller.toggle_partition()
        self.source.entries[Partition.LOCAL].append(_local("topic"))

        self.controller.complete_action(
            ActionRequest(kind=ActionKind.CHECKOUT, partition=Partition.REMOTE, identifier="refs/remotes/origin/topic")
        )

        self.assertTrue(self.controller.visible)
        self.assertIs(self.controller.partition, Partition.LOCAL)
        self.assertEqual(len(self.controller.store), 3)

    def test_delete_reloads_and_clamps(self) -> None:
        self.controller.move_cursor(Motion.END)
        self.source.entries[Partition.LOCAL].pop()

        self.controller.complete_action(
            ActionRequest(kind=ActionKind.DELETE, partition=Partition.LOCAL, identifier="refs/heads/dev")
        )

        self.assertTrue(self.controller.visible)
        self.assertEqual(self.controller.current_selection(), "refs/heads/main")

    def test_command_infos_follow_partition_and_selection(self) -> None:
        infos = {info.name: info for info in self.controller.command_infos()}

        self.assertFalse(infos["checkout"].enabled)
        self.assertTrue(infos["inspect"].enabled)
        self.assertTrue(infos["create"].visible)
        self.assertFalse(infos["fetch"].visible)

        self.controller.toggle_partition()
        infos = {info.name: info for info in self.controller.command_infos()}

        self.assertTrue(infos["checkout"].enabled)
        self.assertFalse(infos["create"].visible)
        self.assertFalse(infos["rename"].visible)
        self.assertTrue(infos["fetch"].visible)
        self.assertTrue(infos["fetch"].enabled)


if __name__ == "__main__":
    unittest.main()
