"""Unit tests for the in-memory day store."""

import pytest

from daystore import DAY_COUNT, DayRecord, DayStore, make_task


class TestSeeding:
    """The store always holds one record per day of the month."""

    def test_fresh_store_has_31_empty_days(self, store):
        days = store.days()
        assert [d.day for d in days] == list(range(1, DAY_COUNT + 1))
        assert all(d.month == 'Oct' for d in days)
        assert all(store.tasks(d.day) == [] for d in days)

    def test_seed_twice_does_not_duplicate(self, store):
        store.append_task(3, make_task('keep me'))
        store.seed()
        assert store.session.query(DayRecord).count() == DAY_COUNT
        assert store.tasks(3) == [{'text': 'keep me', 'completed': False}]

    def test_seed_keeps_existing_labels(self, store):
        other = DayStore(store.session, month_label='Nov')
        other.seed()
        assert other.get(1).month == 'Oct'


class TestGet:

    @pytest.mark.parametrize('day', [0, 32, -1])
    def test_out_of_range_day(self, store, day):
        with pytest.raises(IndexError):
            store.get(day)

    def test_edges(self, store):
        assert store.get(1).day == 1
        assert store.get(31).day == 31


class TestMutation:

    def test_append_keeps_insertion_order(self, store):
        store.append_task(5, make_task('first'))
        store.append_task(5, make_task('second'))
        store.append_task(5, make_task('third', completed=True))
        assert store.tasks(5) == [
            {'text': 'first', 'completed': False},
            {'text': 'second', 'completed': False},
            {'text': 'third', 'completed': True},
        ]

    def test_days_are_independent(self, store):
        store.append_task(5, make_task('only on five'))
        assert store.tasks(6) == []

    def test_replace_overwrites_list(self, store):
        store.append_task(7, make_task('old'))
        store.replace_tasks(7, [make_task('b', True), make_task('a')])
        assert store.tasks(7) == [
            {'text': 'b', 'completed': True},
            {'text': 'a', 'completed': False},
        ]

    def test_replace_with_empty_list(self, store):
        store.append_task(7, make_task('gone'))
        store.replace_tasks(7, [])
        assert store.tasks(7) == []

    def test_reads_are_copies(self, store):
        store.append_task(8, make_task('original'))
        tasks = store.tasks(8)
        tasks[0]['text'] = 'changed'
        tasks.append(make_task('extra'))
        assert store.tasks(8) == [{'text': 'original', 'completed': False}]

    def test_append_after_replace(self, store):
        store.replace_tasks(9, [make_task('a'), make_task('b')])
        store.append_task(9, make_task('c'))
        assert [t['text'] for t in store.tasks(9)] == ['a', 'b', 'c']
