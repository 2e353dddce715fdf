"""
Flask Daily Task Calendar
-------------------------
Small Flask app for a day-by-day to-do list:
  - a 7-day calendar strip over one fixed month, scrolled a week at a time
  - per-day task list: add, edit inline, complete, delete
  - "All" / "Done" filter over the selected day's tasks
State lives in an in-memory SQLite database and is gone when the process exits.
Run:
  pip install -e .
  python app.py
Open http://127.0.0.1:5000/
"""
from flask import Blueprint, Flask, abort, current_app, jsonify, redirect, render_template, request, url_for

import structlog

from daystore import DayStore, db
from dayview import DayView
from logging_config import setup_logging

log = structlog.get_logger()

bp = Blueprint('dayview', __name__)

DEFAULT_CONFIG = {
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'SQLALCHEMY_TRACK_MODIFICATIONS': False,
    'MONTH_LABEL': 'Oct',
    'ROOT_ELEMENT_ID': 'root',
    'INITIAL_DAY': None,
    'LOG_ENV': 'development',
}


# -------------------- Helpers --------------------
def get_view() -> DayView:
    return current_app.extensions['dayview']


def respond(view):
    """JSON callers get the new state, form posts go back to the page."""
    if request.is_json:
        return jsonify(view.snapshot())
    return redirect(url_for('dayview.index'))


def fail(status, message):
    if request.is_json:
        return jsonify({'error': message}), status
    abort(status)


def form_text(key='text'):
    """Read an optional string field from a JSON object or a form body."""
    if request.is_json:
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValueError('request body must be a JSON object')
    else:
        data = request.form
    text = data.get(key)
    if text is not None and not isinstance(text, str):
        raise ValueError(f'{key!r} must be a string')
    return text


def dispatch(event, *args, with_text=False):
    """Fire one view event, mapping bad indices to 404 and bad values to 400."""
    view = get_view()
    try:
        if with_text:
            args += (form_text(),)
        event(view, *args)
    except IndexError as e:
        return fail(404, str(e))
    except ValueError as e:
        return fail(400, str(e))
    return respond(view)


# -------------------- Routes --------------------
@bp.route('/')
def index():
    view = get_view()
    return render_template('index.html', root_id=current_app.config['ROOT_ELEMENT_ID'], **view.render())


@bp.route('/state')
def state():
    return jsonify(get_view().snapshot())


@bp.route('/days/<int:day>', methods=['POST'])
def select_day(day):
    return dispatch(DayView.select_day, day)


@bp.route('/scroll/<direction>', methods=['POST'])
def scroll(direction):
    if direction == 'left':
        return dispatch(DayView.scroll_left)
    if direction == 'right':
        return dispatch(DayView.scroll_right)
    return fail(404, f'unknown direction {direction!r}')


@bp.route('/tasks', methods=['POST'])
def add_task():
    return dispatch(DayView.add_task, with_text=True)


@bp.route('/tasks/<int:index>/edit', methods=['POST'])
def begin_edit(index):
    return dispatch(DayView.begin_edit, index)


@bp.route('/tasks/<int:index>/save', methods=['POST'])
def save_edit(index):
    return dispatch(DayView.save_edit, index, with_text=True)


@bp.route('/tasks/<int:index>/toggle', methods=['POST'])
def toggle_task(index):
    return dispatch(DayView.toggle_task, index)


@bp.route('/tasks/<int:index>/delete', methods=['POST'])
def delete_task(index):
    return dispatch(DayView.delete_task, index)


@bp.route('/filter/<mode>', methods=['POST'])
def set_filter(mode):
    return dispatch(DayView.set_filter, mode)


def shell():
    return render_template('shell.html', root_id=None)


# -------------------- Bootstrap --------------------
def mount(app, store):
    """Mount the day view into the shell's host element, if one is configured."""
    root_id = app.config.get('ROOT_ELEMENT_ID')
    if not root_id:
        log.info('no host element configured, day view not mounted')
        return None
    view = DayView(store, today=app.config.get('INITIAL_DAY'))
    with app.app_context():
        view.mount()
    app.extensions['dayview'] = view
    app.register_blueprint(bp)
    log.info('day view mounted', root_id=root_id, day=view.selected_day)
    return view


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG)
    app.config.from_prefixed_env('DAYTASKS')
    if test_config:
        app.config.from_mapping(test_config)

    setup_logging(app.config['LOG_ENV'])

    db.init_app(app)
    store = DayStore(db.session, month_label=app.config['MONTH_LABEL'])
    with app.app_context():
        db.create_all()
        store.seed()
    app.extensions['daystore'] = store

    if mount(app, store) is None:
        app.add_url_rule('/', 'shell', shell)
    return app


if __name__ == '__main__':
    app = create_app()
    log.info('starting Flask Daily Task Calendar', url='http://127.0.0.1:5000/')
    app.run(host='0.0.0.0', port=5000, debug=True)
