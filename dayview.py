"""
Day View
--------
View state for the calendar strip and the task list of the selected day.
Each public method is one user event. Mutations go to the injected
DayStore first, then ``active_tasks`` is refreshed from the same list.
"""
from datetime import date

import structlog

from daystore import DAY_COUNT, make_task

log = structlog.get_logger()

WINDOW_SIZE = 7
MAX_SCROLL = DAY_COUNT - WINDOW_SIZE  # 24

SHOW_ALL = 'all'
SHOW_DONE = 'done'
FILTER_MODES = (SHOW_ALL, SHOW_DONE)


def clamp(value, low, high):
    return max(low, min(value, high))


def copy_tasks(tasks):
    return [dict(t) for t in tasks]


class DayView:
    def __init__(self, store, today=None):
        if today is None:
            today = date.today().day
        self.store = store
        self.active_tasks = []
        self.draft_text = ''
        self.editing_index = None
        self.edit_draft_text = ''
        self.filter_mode = SHOW_ALL
        self.selected_day = clamp(today, 1, DAY_COUNT)
        self.scroll_start = clamp(today - 4, 0, MAX_SCROLL)

    def mount(self):
        """Load the initial day, as if its calendar cell had been clicked."""
        self.select_day(self.selected_day)
        return self

    @property
    def is_editing(self):
        return self.editing_index is not None

    def _task_index(self, index):
        if not 0 <= index < len(self.active_tasks):
            raise IndexError(f'task index {index} outside 0..{len(self.active_tasks) - 1}')
        return index

    def _commit(self, tasks):
        self.store.replace_tasks(self.selected_day, tasks)
        self.active_tasks = copy_tasks(tasks)

    def _cancel_edit(self):
        self.editing_index = None
        self.edit_draft_text = ''

    # -------------------- Calendar --------------------
    def select_day(self, day):
        tasks = self.store.tasks(day)
        self.selected_day = day
        self.active_tasks = tasks
        log.debug('day selected', day=day, tasks=len(tasks))

    def scroll(self, delta):
        self.scroll_start = clamp(self.scroll_start + delta, 0, MAX_SCROLL)

    def scroll_left(self):
        self.scroll(-WINDOW_SIZE)

    def scroll_right(self):
        self.scroll(WINDOW_SIZE)

    def visible_days(self):
        days = self.store.days()
        return days[self.scroll_start:self.scroll_start + WINDOW_SIZE]

    # -------------------- Tasks --------------------
    def set_draft(self, text):
        self.draft_text = text

    def add_task(self, text=None):
        """Append the trimmed draft to the selected day. Blank drafts are dropped.

        A ``text`` argument replaces the draft first, as typing into the input would.
        """
        if text is not None:
            self.set_draft(text)
        text = self.draft_text.strip()
        if not text:
            return False
        self.store.append_task(self.selected_day, make_task(text))
        self.active_tasks = self.store.tasks(self.selected_day)
        self.draft_text = ''
        if self.is_editing:
            self._cancel_edit()
        log.info('task added', day=self.selected_day, text=text)
        return True

    def begin_edit(self, index):
        self._task_index(index)
        self.editing_index = index
        self.edit_draft_text = self.active_tasks[index]['text']

    def set_edit_draft(self, text):
        self.edit_draft_text = text

    def save_edit(self, index, text=None):
        # blank text is accepted here, unlike add_task
        self._task_index(index)
        if text is not None:
            self.set_edit_draft(text)
        tasks = [
            dict(t, text=self.edit_draft_text) if i == index else dict(t)
            for i, t in enumerate(self.active_tasks)
        ]
        self._commit(tasks)
        self._cancel_edit()
        log.info('task edited', day=self.selected_day, index=index)

    def delete_task(self, index):
        self._task_index(index)
        tasks = [dict(t) for i, t in enumerate(self.active_tasks) if i != index]
        self._commit(tasks)
        if self.is_editing:
            self._cancel_edit()
        log.info('task deleted', day=self.selected_day, index=index)

    def toggle_task(self, index):
        self._task_index(index)
        tasks = [
            dict(t, completed=not t['completed']) if i == index else dict(t)
            for i, t in enumerate(self.active_tasks)
        ]
        self._commit(tasks)
        log.debug('task toggled', day=self.selected_day, index=index,
                  completed=tasks[index]['completed'])

    # -------------------- Filter --------------------
    def set_filter(self, mode):
        if mode not in FILTER_MODES:
            raise ValueError(f'unknown filter mode {mode!r}')
        self.filter_mode = mode

    def filtered_rows(self):
        """(position in active_tasks, task) pairs that the filter lets through."""
        return [
            (i, t) for i, t in enumerate(self.active_tasks)
            if self.filter_mode == SHOW_ALL or t['completed']
        ]

    # -------------------- Rendering --------------------
    def render(self):
        month = self.store.get(self.selected_day).month
        return {
            'days': [
                {'day': d.day, 'month': d.month, 'selected': d.day == self.selected_day}
                for d in self.visible_days()
            ],
            'can_scroll_left': self.scroll_start > 0,
            'can_scroll_right': self.scroll_start < MAX_SCROLL,
            'heading': f'Todo List for {self.selected_day} {month}',
            'rows': self.filtered_rows(),
            'filter_mode': self.filter_mode,
            'draft_text': self.draft_text,
            'editing_index': self.editing_index,
            'edit_draft_text': self.edit_draft_text,
        }

    def snapshot(self):
        return {
            'selected_day': self.selected_day,
            'scroll_start': self.scroll_start,
            'visible_days': [d.day for d in self.visible_days()],
            'active_tasks': copy_tasks(self.active_tasks),
            'filtered_tasks': [dict(t, index=i) for i, t in self.filtered_rows()],
            'filter_mode': self.filter_mode,
            'draft_text': self.draft_text,
            'editing_index': self.editing_index,
            'edit_draft_text': self.edit_draft_text,
        }
