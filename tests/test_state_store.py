import unittest

from teamsheet.models import Player, TeamState
from teamsheet.services import StateStore


class StateStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = StateStore(TeamState(players=[Player(id="p1", first_name="Ann")]))
        self.commits = []
        self.store.subscribe(lambda previous, current: self.commits.append((previous, current)))

    def test_commit_installs_draft_and_notifies(self) -> None:
        before = self.store.state
        with self.store.transaction() as tx:
            tx.draft.team_name = "Harbour FC"

        self.assertEqual(self.store.state.team_name, "Harbour FC")
        self.assertEqual(before.team_name, "Your Team")
        self.assertEqual(len(self.commits), 1)
        self.assertIs(self.commits[0][0], before)
        self.assertIs(self.commits[0][1], self.store.state)

    def test_draft_is_isolated_from_committed_state(self) -> None:
        with self.store.transaction() as tx:
            tx.draft.players[0].first_name = "Changed"
            self.assertEqual(self.store.state.players[0].first_name, "Ann")

    def test_abandoned_transaction_does_not_commit(self) -> None:
        before = self.store.state
        with self.store.transaction() as tx:
            tx.draft.team_name = "Ignored"
            tx.abandon("testing %s", "abandon")

        self.assertIs(self.store.state, before)
        self.assertEqual(self.commits, [])

    def test_exception_discards_draft(self) -> None:
        before = self.store.state
        with self.assertRaises(KeyError):
            with self.store.transaction() as tx:
                tx.draft.team_name = "Half done"
                raise KeyError("boom")

        self.assertIs(self.store.state, before)
        self.assertEqual(self.commits, [])

        # The store is usable again afterwards
        with self.store.transaction() as tx:
            tx.draft.team_name = "Harbour FC"
        self.assertEqual(self.store.state.team_name, "Harbour FC")

    def test_nested_transaction_is_rejected(self) -> None:
        with self.assertRaises(RuntimeError):
            with self.store.transaction():
                with self.store.transaction():
                    pass
        self.assertEqual(self.commits, [])

    def test_unsubscribe(self) -> None:
        store = StateStore()
        seen = []

        def observer(previous, current):
            seen.append(current)

        store.subscribe(observer)
        store.unsubscribe(observer)
        store.unsubscribe(observer)
        with store.transaction() as tx:
            tx.draft.team_name = "Harbour FC"
        self.assertEqual(seen, [])


if __name__ == "__main__":
    unittest.main()
