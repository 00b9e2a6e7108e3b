"""
Database management commands, registered as `flask db-manage ...`

    flask db-manage init [--no-sample-data]
    flask db-manage seed
    flask db-manage reset
    flask db-manage clear
    flask db-manage stats
"""

import click
from flask.cli import with_appcontext
from tabulate import tabulate

from skyway.db_init.init_db import init_database, clear_database, reset_database, seed_database
from skyway.models import (
    Booking, Flight, Location, NotificationRecord, PageContent, PaymentAccount, SiteSetting, User
)


@click.group()
def db_commands():
    """Create, seed and wipe the Skyway database"""


def _echo_counts(counts):
    for name, count in counts.items():
        click.echo(f'   - {name.capitalize()}: {count}')


@db_commands.command('init')
@click.option('--no-sample-data', is_flag=True, help='Create the tables only')
@with_appcontext
def init_db_command(no_sample_data):
    """Create missing tables, then load sample users, flights and bookings"""
    counts = init_database(with_sample_data=not no_sample_data)
    click.echo('Database initialized successfully!')
    _echo_counts(counts)


@db_commands.command('seed')
@with_appcontext
def seed_db_command():
    """Load sample data into the existing tables"""
    _echo_counts(seed_database())


@db_commands.command('reset')
@click.confirmation_option(prompt='Every table will be dropped and reseeded. Continue?')
@with_appcontext
def reset_db_command():
    counts = reset_database()
    click.echo('Database reset successfully!')
    _echo_counts(counts)


@db_commands.command('clear')
@click.confirmation_option(prompt='Every table will be dropped and left empty. Continue?')
@with_appcontext
def clear_db_command():
    clear_database()
    click.echo('Database cleared successfully!')


@db_commands.command('stats')
@with_appcontext
def stats_command():
    """Row count per table, and bookings per status"""
    models = (User, Location, Flight, Booking, PaymentAccount, NotificationRecord, PageContent, SiteSetting)
    click.echo(tabulate(
        [[model.__tablename__, model.query.count()] for model in models],
        headers=['Table', 'Rows']
    ))

    statuses = {}
    for (status,) in Booking.query.with_entities(Booking.status):
        statuses[status] = statuses.get(status, 0) + 1
    if statuses:
        click.echo()
        click.echo(tabulate(sorted(statuses.items()), headers=['Status', 'Bookings']))


def register_commands(app):
    app.cli.add_command(db_commands, name='db-manage')
