'''
Calendar tests
'''

from datetime import date
from io import StringIO

from genix.calendar import (Calendar, Event, Events, EVENTS_PATH,
                            parse_date, parse_month, render_month,
                            render_events)

from pytest import mark


FEBRUARY = date(2024, 2, 1)


def session(vfs, input, today=FEBRUARY):
    out = StringIO()
    Calendar(vfs, input, out, today=today).run()
    return out.getvalue()


@mark.parametrize('text, expected', [
    ('2024-02-14', (2024, 2, 14)),
    ('2024-2-5', (2024, 2, 5)),
    ('2024-02-30', (2024, 2, 30)),
    ('2024-13-01', None),
    ('0-01-01', None),
    ('2024-01-32', None),
    ('tomorrow', None),
    ('', None),
])
def test_parse_date(text, expected):
    assert parse_date(text) == expected


@mark.parametrize('token, expected', [
    ('2', 2),
    ('12', 12),
    ('13', None),
    ('feb', 2),
    ('MARCH', 3),
    ('ju', 6),
    ('x', None),
])
def test_parse_month(token, expected):
    assert parse_month(token) == expected


def test_render_month():
    events = Events([Event(2024, 2, 14, 'Valentine'),
                     Event(2024, 3, 1, 'Elsewhere')])
    lines = render_month(2024, 2, events).split('\n')
    assert lines[:3] == ['', 'February 2024', 'Mo Tu We Th Fr Sa Su']
    # 2024-02-01 was a Thursday.
    assert lines[3] == '          1  2  3  4'
    assert lines[4] == ' 5  6  7  8  9 10 11'
    assert lines[5] == '12 13 14*15 16 17 18'
    # Leap year.
    assert lines[7] == '26 27 28 29'
    assert lines[8:] == ['', '']


def test_render_events():
    events = Events([Event(2024, 2, 14, 'Valentine'),
                     Event(2024, 2, 3, 'Party')])
    assert render_events(2024, 2, events) == ('Events for February 2024:\n'
                                              '  14: Valentine\n'
                                              '  03: Party\n')
    assert render_events(2024, 3, events) == ('Events for March 2024:\n'
                                              '  (no events)\n')


def test_load_skips_garbage(vfs):
    vfs.write(EVENTS_PATH, 'garbage\n\n2024-02-01|First | of the month\n'
                           '2024-02-02|\n')
    events = Events.load(vfs)
    assert list(events) == [Event(2024, 2, 1, 'First | of the month')]


def test_load_nothing(vfs):
    assert len(Events.load(vfs)) == 0


def test_long_descriptions_are_truncated():
    events = Events()
    assert events.add(2024, 1, 1, 'x' * 200).description == 'x' * 127


def test_add_and_view(vfs, lines):
    out = session(vfs, lines('add', '2024-02-14', 'Valentine',
                             'view 14', 'exit'))
    assert vfs.read(EVENTS_PATH) == '2024-02-14|Valentine\n'
    assert 'Event added for 2024-02-14.\n' in out
    assert '12 13 14*15' in out
    assert 'Events on 2024-02-14:\n  - Valentine\n' in out
    assert out.endswith('Exiting calendar.\n')


def test_add_on_default_month(vfs, lines):
    session(vfs, lines('add', '', '5', 'Dentist', 'exit'))
    assert vfs.read(EVENTS_PATH) == '2024-02-05|Dentist\n'


def test_add_rejects_bad_input(vfs, lines):
    out = session(vfs, lines('add', '', '30',
                             'add', 'soon',
                             'add', '2024-02-01', '',
                             'exit'))
    assert 'Invalid day for the specified month/year.' in out
    assert 'Invalid date format.' in out
    assert 'Description cannot be empty.' in out
    assert not vfs.exists(EVENTS_PATH)


def test_edit_picks_among_several(vfs, lines):
    vfs.write(EVENTS_PATH, '2024-02-14|A\n2024-02-14|B\n')
    out = session(vfs, lines('edit', '2024-02-14', '2', 'C', 'exit'))
    assert 'Select event to edit:\n  1) A\n  2) B\n' in out
    assert 'Current description: B\n' in out
    assert 'Event updated.' in out
    assert vfs.read(EVENTS_PATH) == '2024-02-14|A\n2024-02-14|C\n'


def test_edit_bad_choice(vfs, lines):
    vfs.write(EVENTS_PATH, '2024-02-14|A\n2024-02-14|B\n')
    out = session(vfs, lines('edit', '2024-02-14', '3', 'exit'))
    assert 'Invalid selection.' in out
    assert vfs.read(EVENTS_PATH) == '2024-02-14|A\n2024-02-14|B\n'


def test_delete(vfs, lines):
    vfs.write(EVENTS_PATH, '2024-02-14|A\n2024-02-15|B\n')
    out = session(vfs, lines('delete', '2024-02-14',
                             'delete', '2024-02-20', 'exit'))
    assert 'Event removed.' in out
    assert 'No events found on 2024-02-20.' in out
    assert vfs.read(EVENTS_PATH) == '2024-02-15|B\n'


def test_nothing_to_edit_or_delete(vfs, lines):
    out = session(vfs, lines('edit', 'delete', 'exit'))
    assert 'No events to edit.' in out
    assert 'No events to delete.' in out


def test_navigation(vfs, lines):
    out = session(vfs, lines('next', 'prev', 'prev', 'goto mar 2025',
                             'goto', 'goto 13 2024', 'exit'),
                  today=date(2024, 12, 1))
    assert 'January 2025\n' in out
    assert 'November 2024\n' in out
    assert 'March 2025\n' in out
    assert 'Usage: goto <month> <year>' in out
    assert 'Invalid month/year combination.' in out


def test_view(vfs, lines):
    vfs.write(EVENTS_PATH, '2024-03-01|Spring\n')
    out = session(vfs, lines('view', 'view 2024-03-01', 'view 30',
                             'view 2', 'view soon', 'exit'))
    assert 'Events for February 2024:\n  (no events)\n' in out
    assert 'Events on 2024-03-01:\n  - Spring\n' in out
    assert 'Invalid day for the current month.' in out
    assert 'No events on 2024-02-02.' in out
    assert "Unrecognized view argument." in out


def test_unknown_and_help(vfs, lines):
    out = session(vfs, lines('frobnicate', 'HELP', 'exit'))
    assert 'Unknown command: frobnicate' in out
    assert Calendar.HELP in out


def test_cancelled_input(vfs, lines):
    out = session(vfs, lines('add'))
    assert out.endswith('Input cancelled.\n\nInput error. Exiting calendar.\n')
