"""
Day Store
---------
Fixed 31-slot collection of per-day task lists, kept in a volatile
in-memory SQLite database through Flask-SQLAlchemy. Every read hands out
plain dict copies, never the mapped rows themselves.
"""
import structlog
from flask_sqlalchemy import SQLAlchemy

log = structlog.get_logger()

DAY_COUNT = 31

db = SQLAlchemy()


# -------------------- Models --------------------
class DayRecord(db.Model):
    __tablename__ = 'day_record'

    day = db.Column(db.Integer, primary_key=True, autoincrement=False)  # 1..31
    month = db.Column(db.String(16), nullable=False)
    tasks = db.relationship('Task', order_by='Task.position',
                            cascade='all, delete-orphan', lazy='selectin')

    def to_dict(self):
        return {
            'day': self.day,
            'month': self.month,
            'tasks': [t.to_dict() for t in self.tasks],
        }


class Task(db.Model):
    __tablename__ = 'task'

    id = db.Column(db.Integer, primary_key=True)
    day = db.Column(db.Integer, db.ForeignKey('day_record.day'), nullable=False)
    position = db.Column(db.Integer, nullable=False)
    text = db.Column(db.Text, nullable=False, default='')
    completed = db.Column(db.Boolean, nullable=False, default=False)

    def to_dict(self):
        return {'text': self.text, 'completed': bool(self.completed)}


def make_task(text, completed=False):
    return {'text': text, 'completed': completed}


# -------------------- Store --------------------
class DayStore:
    """Owns the 31 day records. Pass one instance to the view that uses it."""

    def __init__(self, session, month_label='Oct'):
        self.session = session
        self.month_label = month_label

    def seed(self):
        """Create the day records that are missing. Safe to call twice."""
        existing = {d for (d,) in self.session.query(DayRecord.day).all()}
        created = 0
        for day in range(1, DAY_COUNT + 1):
            if day not in existing:
                self.session.add(DayRecord(day=day, month=self.month_label))
                created += 1
        self.session.commit()
        log.debug('day store seeded', created=created, month=self.month_label)

    def get(self, day) -> DayRecord:
        if not isinstance(day, int) or not 1 <= day <= DAY_COUNT:
            raise IndexError(f'day {day!r} outside 1..{DAY_COUNT}')
        record = self.session.get(DayRecord, day)
        if record is None:
            raise IndexError(f'day {day} has not been seeded')
        return record

    def days(self):
        return self.session.query(DayRecord).order_by(DayRecord.day).all()

    def tasks(self, day):
        return [t.to_dict() for t in self.get(day).tasks]

    def replace_tasks(self, day, tasks):
        record = self.get(day)
        record.tasks = [
            Task(position=i, text=t['text'], completed=bool(t['completed']))
            for i, t in enumerate(tasks)
        ]
        self.session.commit()

    def append_task(self, day, task):
        record = self.get(day)
        record.tasks.append(Task(position=len(record.tasks), text=task['text'],
                                 completed=bool(task['completed'])))
        self.session.commit()
