'''
Month view calendar with events kept in the VFS.

Events are stored one per line, as YYYY-MM-DD|description.
'''

from collections import namedtuple
from datetime import date
import calendar
import logging
import sys

import regex

from .util import VFSError
from .terminal import StreamInput


logger = logging.getLogger(__name__)

EVENTS_PATH = 'home/user/events.txt'
MAX_DESCRIPTION_LENGTH = 127

DATE = regex.compile(r'\s*(?<year>\d+)-(?<month>\d+)-(?<day>\d+)')
STORED_EVENT = regex.compile(r'(?<year>\d+)-(?<month>\d+)-(?<day>\d+)'
                             r'\|(?<description>.+)')
INTEGER = regex.compile(r'\s*[+-]?\d+')

MONTHS = [name.lower() for name in calendar.month_name[1:]]


Event = namedtuple('Event', 'year month day description')


def parse_int(text):
    '''
    Leading integer of text, or 0 if there is none.
    '''
    match = INTEGER.match(text or '')
    return int(match.group()) if match else 0


def parse_date(text):
    '''
    Return (year, month, day) from Y-M-D text, or None if it isn't one.

    Only checks that the day is between 1 and 31.
    '''
    match = DATE.match(text or '')
    if match is None:
        return None
    year, month, day = (int(match.group(name))
                        for name in ('year', 'month', 'day'))
    if year < 1 or not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    return year, month, day


def parse_month(token):
    '''
    Month number from a number or (a prefix of) a month name, or None.
    '''
    token = token.lower()
    if len(token) <= 2 and token[:1].isdigit():
        month = parse_int(token)
        if 1 <= month <= 12:
            return month
    for number, name in enumerate(MONTHS, start=1):
        if name.startswith(token):
            return number
    return None


def days_in_month(year, month):
    return calendar.monthrange(year, month)[1]


def format_date(year, month, day):
    return '{:04d}-{:02d}-{:02d}'.format(year, month, day)


class Events:
    '''
    Every known event, in insertion order.
    '''
    def __init__(self, events=()):
        self.events = list(events)

    def __len__(self):
        return len(self.events)

    def __iter__(self):
        return iter(self.events)

    def __getitem__(self, index):
        return self.events[index]

    @classmethod
    def load(cls, vfs, path=EVENTS_PATH):
        '''
        Read events from the VFS, skipping lines that don't parse.
        '''
        events = cls()
        if not vfs.exists(path):
            return events
        for line in vfs.read(path).splitlines():
            match = STORED_EVENT.fullmatch(line)
            if match is None:
                if line:
                    logger.debug('Skipping malformed event %r', line)
                continue
            events.add(int(match.group('year')), int(match.group('month')),
                       int(match.group('day')), match.group('description'))
        logger.debug('Loaded %d event(s) from %s', len(events), path)
        return events

    def dumps(self):
        return ''.join('{}|{}\n'.format(format_date(*event[:3]),
                                        event.description)
                       for event in self.events)

    def save(self, vfs, path=EVENTS_PATH):
        vfs.write(path, self.dumps())

    def add(self, year, month, day, description):
        event = Event(year, month, day,
                      description[:MAX_DESCRIPTION_LENGTH])
        self.events.append(event)
        return event

    def on(self, year, month, day):
        '''
        Return the indices of the events on a given day.
        '''
        return [index
                for index, event
                in enumerate(self.events)
                if event[:3] == (year, month, day)]

    def during(self, year, month):
        return [event
                for event
                in self.events
                if (event.year, event.month) == (year, month)]

    def describe(self, index, description):
        self.events[index] = self.events[index]._replace(
            description=description[:MAX_DESCRIPTION_LENGTH])

    def remove(self, index):
        return self.events.pop(index)


def render_month(year, month, events):
    '''
    Monday first month grid, days with events marked with a *.
    '''
    marked = {event.day for event in events.during(year, month)}
    lines = ['',
             '{} {}'.format(calendar.month_name[month], year),
             'Mo Tu We Th Fr Sa Su']
    for week in calendar.Calendar(calendar.MONDAY).monthdayscalendar(year,
                                                                     month):
        cells = ['   ' if day == 0 else
                 '{:2d}{}'.format(day, '*' if day in marked else ' ')
                 for day in week]
        lines.append(''.join(cells).rstrip())
    lines.append('')
    return '\n'.join(lines) + '\n'


def render_events(year, month, events):
    lines = ['Events for {} {}:'.format(calendar.month_name[month], year)]
    lines.extend('  {:02d}: {}'.format(event.day, event.description)
                 for event in events.during(year, month))
    if len(lines) == 1:
        lines.append('  (no events)')
    return '\n'.join(lines) + '\n'


class Cancelled(Exception):
    '''
    The user ran out of input in the middle of a command.
    '''


class Calendar:
    '''
    Interactive month view calendar.
    '''

    PROMPT = 'calendar> '
    HELP = ('Commands: add, edit, delete, view [day], next, prev, '
            'goto <month> <year>, help, exit')
    # Command methods returning True changed the events, which need saving.
    COMMANDS = frozenset({'exit', 'help', 'next', 'prev', 'goto',
                          'add', 'edit', 'delete', 'view'})

    def __init__(self, vfs, input=None, out=None, today=None,
                 path=EVENTS_PATH):
        '''
        :param vfs: Where events are loaded from and saved to.
        :param input: Where lines come from, anything with ask(prompt).
        :param out: Stream everything is printed to.
        :param today: Date whose month is shown first.
        '''
        self.vfs = vfs
        self.input = StreamInput() if input is None else input
        self.out = sys.stdout if out is None else out
        self.path = path
        today = date.today() if today is None else today
        self.year, self.month = today.year, today.month
        self.events = Events()

    def print(self, *args, **kwargs):
        print(*args, file=self.out, **kwargs)

    def ask(self, prompt):
        try:
            return self.input.ask(prompt)
        except EOFError:
            raise Cancelled

    def run(self):
        self.events = Events.load(self.vfs, self.path)
        self.print("Calendar (type 'help' for commands, 'exit' to return)")
        self.display()
        while True:
            try:
                line = self.input.ask(self.PROMPT)
            except EOFError:
                self.print('\nInput error. Exiting calendar.')
                return
            if not self.execute(line):
                return

    def execute(self, line):
        '''
        Run one command line. Return False once the calendar should close.
        '''
        words = line.split()
        if not words:
            return True
        command, args = words[0].lower(), words[1:]
        if command not in self.COMMANDS:
            self.print('Unknown command:', command)
            return True
        if command == 'exit':
            self.print('Exiting calendar.')
            return False
        try:
            changed = getattr(self, command)(*args[:2])
        except Cancelled:
            self.print('Input cancelled.')
            changed = False
        if changed:
            self.save()
            self.display()
        return True

    def save(self):
        try:
            self.events.save(self.vfs, self.path)
        except VFSError as e:
            logger.debug('Saving events failed', exc_info=e)
            self.print('Failed to write events to', self.path)

    def display(self):
        self.print(render_month(self.year, self.month, self.events), end='')
        self.print(render_events(self.year, self.month, self.events), end='')

    def help(self, *args):
        self.print(self.HELP)

    def next(self, *args):
        self.year, self.month = ((self.year + 1, 1) if self.month == 12 else
                                 (self.year, self.month + 1))
        self.display()

    def prev(self, *args):
        self.year, self.month = ((self.year - 1, 12) if self.month == 1 else
                                 (self.year, self.month - 1))
        self.display()

    def goto(self, month=None, year=None):
        if month is None or year is None:
            self.print('Usage: goto <month> <year>')
            return
        month, year = parse_month(month), parse_int(year)
        if month is None or year < 1:
            self.print('Invalid month/year combination.')
            return
        self.year, self.month = year, month
        self.display()

    def add(self, *args):
        answer = self.ask('Enter date (YYYY-MM-DD) '
                          '[default {:04d}-{:02d}-<day>]: '
                          .format(self.year, self.month))
        if answer:
            parsed = parse_date(answer)
            if parsed is None:
                self.print('Invalid date format.')
                return False
            year, month, day = parsed
        else:
            year, month = self.year, self.month
            day = parse_int(self.ask('Enter day (1-31): '))
        if not 1 <= day <= days_in_month(year, month):
            self.print('Invalid day for the specified month/year.')
            return False
        description = self.ask('Enter description: ')
        if not description:
            self.print('Description cannot be empty.')
            return False
        self.events.add(year, month, day, description)
        self.print('Event added for {}.'.format(format_date(year, month, day)))
        return True

    def _select(self, verb):
        '''
        Ask for a date, and which of its events, if there are several.

        Return the event's index, or None.
        '''
        if not self.events:
            self.print('No events to {}.'.format(verb))
            return None
        parsed = parse_date(
            self.ask('Enter date of event to {} (YYYY-MM-DD): '.format(verb)))
        if parsed is None:
            self.print('Invalid date format.')
            return None
        matches = self.events.on(*parsed)
        if not matches:
            self.print('No events found on {}.'.format(format_date(*parsed)))
            return None
        if len(matches) == 1:
            return matches[0]
        self.print('Select event to {}:'.format(verb))
        for number, index in enumerate(matches, start=1):
            self.print('  {}) {}'.format(number,
                                         self.events[index].description))
        choice = parse_int(self.ask('Choice (1-{}): '.format(len(matches))))
        if not 1 <= choice <= len(matches):
            self.print('Invalid selection.')
            return None
        return matches[choice - 1]

    def edit(self, *args):
        index = self._select('edit')
        if index is None:
            return False
        self.print('Current description:', self.events[index].description)
        description = self.ask('Enter new description: ')
        if not description:
            self.print('Description cannot be empty.')
            return False
        self.events.describe(index, description)
        self.print('Event updated.')
        return True

    def delete(self, *args):
        index = self._select('delete')
        if index is None:
            return False
        self.events.remove(index)
        self.print('Event removed.')
        return True

    def view(self, arg=None, *args):
        if arg is None:
            self.print(render_events(self.year, self.month, self.events),
                       end='')
            return
        if arg[0].isdigit() and parse_date(arg) is None:
            day = parse_int(arg)
            if not 1 <= day <= days_in_month(self.year, self.month):
                self.print('Invalid day for the current month.')
                return
            when = self.year, self.month, day
        else:
            when = parse_date(arg)
            if when is None:
                self.print("Unrecognized view argument. Use 'view', "
                           "'view <day>', or 'view YYYY-MM-DD'.")
                return
        matches = self.events.on(*when)
        if not matches:
            self.print('No events on {}.'.format(format_date(*when)))
            return
        self.print('Events on {}:'.format(format_date(*when)))
        for index in matches:
            self.print('  -', self.events[index].description)
