"""
Unit Tests for the in-process storage backend
Tests for: CRUD, ordering, search, partial update and delete semantics
"""
from datetime import datetime, timedelta

import pytest

from database import seed_program_catalog
from db_modules.memory_storage import MemoryStorage
from models import Category, Program, ProgramType, Registration, Team, User, UserRole
from program_catalog import DEFAULT_PROGRAMS


@pytest.fixture
def memory():
    return MemoryStorage()


def make_registration(name, created_at, category='junior', team='T1', place='P', programs=None):
    return Registration(
        full_name=name,
        place=place,
        team_name=team,
        category=category,
        programs=programs or ['junior-qiraat'],
        created_at=created_at,
        updated_at=created_at,
    )


class TestRegistrations:
    """Test registration storage"""

    def test_round_trip_keeps_programs_and_category(self, memory):
        created = memory.create_registration(
            Registration(full_name='A', place='P', team_name='T1', category='junior', programs=['junior-qiraat'])
        )
        loaded = memory.get_registration(created.id)
        assert loaded.programs == ['junior-qiraat']
        assert loaded.category == Category.JUNIOR

    def test_list_is_newest_first(self, memory):
        now = datetime.now()
        memory.create_registration(make_registration('Old', now - timedelta(days=2)))
        memory.create_registration(make_registration('New', now))
        memory.create_registration(make_registration('Mid', now - timedelta(days=1)))

        assert [r.full_name for r in memory.get_registrations()] == ['New', 'Mid', 'Old']

    def test_list_by_category(self, memory):
        now = datetime.now()
        memory.create_registration(make_registration('J', now))
        memory.create_registration(make_registration('S', now, category='senior', programs=['senior-qiraat']))

        assert [r.full_name for r in memory.get_registrations_by_category('senior')] == ['S']

    def test_search_is_case_insensitive_over_name_team_and_place(self, memory):
        now = datetime.now()
        memory.create_registration(make_registration('Amina', now, team='Blue', place='Kochi'))
        memory.create_registration(make_registration('Basil', now - timedelta(hours=1), team='Green', place='AMINABAD'))
        memory.create_registration(make_registration('Carl', now, team='Red', place='Calicut'))

        assert [r.full_name for r in memory.search_registrations('amina')] == ['Amina', 'Basil']
        assert [r.full_name for r in memory.search_registrations('GREEN')] == ['Basil']
        assert memory.search_registrations('zzz') == []

    def test_search_treats_wildcards_literally(self, memory):
        memory.create_registration(make_registration('100% Sure', datetime.now()))
        memory.create_registration(make_registration('Plain', datetime.now()))

        assert [r.full_name for r in memory.search_registrations('%')] == ['100% Sure']

    def test_search_limit(self, memory):
        for i in range(5):
            memory.create_registration(make_registration(f'Name {i}', datetime.now()))
        assert len(memory.search_registrations('name', limit=3)) == 3

    def test_partial_update_merges_and_stamps(self, memory):
        past = datetime.now() - timedelta(days=1)
        created = memory.create_registration(make_registration('A', past))

        updated = memory.update_registration(created.id, {'place': 'Q', 'category': 'senior'})

        assert updated.place == 'Q'
        assert updated.full_name == 'A'
        assert updated.category == Category.SENIOR
        assert updated.updated_at > past
        assert updated.created_at == past

    def test_update_missing_returns_none(self, memory):
        assert memory.update_registration('missing', {'place': 'Q'}) is None

    def test_delete_reports_whether_removed(self, memory):
        created = memory.create_registration(make_registration('A', datetime.now()))

        assert memory.delete_registration(created.id) is True
        assert memory.delete_registration(created.id) is False
        assert memory.get_registrations() == []

    def test_count_registrations_with_program_follows_aliases(self, memory):
        memory.create_registration(make_registration('A', datetime.now(), programs=['qiraat']))
        memory.create_registration(make_registration('B', datetime.now(), programs=['junior-qiraat', 'drawing']))
        memory.create_registration(make_registration('C', datetime.now(), programs=['junior-bank']))

        assert memory.count_registrations_with_program('junior-qiraat') == 2
        assert memory.count_registrations_with_program('junior-drawing') == 1
        assert memory.count_registrations_with_program('senior-qiraat') == 0

    def test_returned_rows_are_copies(self, memory):
        created = memory.create_registration(make_registration('A', datetime.now()))
        loaded = memory.get_registration(created.id)
        loaded.programs.append('junior-bank')

        assert memory.get_registration(created.id).programs == ['junior-qiraat']


class TestPrograms:
    """Test program storage"""

    def test_sorted_by_category_order_then_name(self, memory):
        memory.create_program(Program(program_id='s-b', name='B', category='senior', type='stage', display_order=1))
        memory.create_program(Program(program_id='j-2', name='Z', category='junior', type='stage', display_order=2))
        memory.create_program(Program(program_id='j-1b', name='B', category='junior', type='stage', display_order=1))
        memory.create_program(Program(program_id='j-1a', name='A', category='junior', type='stage', display_order=1))

        assert [p.program_id for p in memory.get_programs()] == ['j-1a', 'j-1b', 'j-2', 's-b']

    def test_active_and_category_filters(self, memory):
        memory.create_program(Program(program_id='a', name='A', category='junior', type='stage'))
        memory.create_program(Program(program_id='b', name='B', category='junior', type='stage', is_active=False))
        memory.create_program(Program(program_id='c', name='C', category='senior', type='non-stage'))

        assert [p.program_id for p in memory.get_active_programs()] == ['a', 'c']
        assert [p.program_id for p in memory.get_programs_by_category('junior')] == ['a', 'b']

    def test_update_coerces_enums(self, memory):
        program = memory.create_program(Program(program_id='a', name='A', category='junior', type='stage'))

        updated = memory.update_program(program.id, {'category': 'senior', 'type': 'non-stage'})

        assert updated.category == Category.SENIOR
        assert updated.type == ProgramType.NON_STAGE
        assert memory.get_program_by_program_id('a').category == Category.SENIOR

    def test_update_and_delete_missing(self, memory):
        assert memory.update_program('missing', {'name': 'X'}) is None
        assert memory.delete_program('missing') is False

    def test_seed_runs_once(self, memory):
        assert seed_program_catalog(memory) == len(DEFAULT_PROGRAMS)
        assert seed_program_catalog(memory) == 0
        assert memory.count_programs() == len(DEFAULT_PROGRAMS)


class TestTeamsAndUsers:
    """Test team and user storage"""

    def test_teams_sorted_by_name_and_active_filter(self, memory):
        memory.create_team(Team(name='Zeta'))
        memory.create_team(Team(name='Alpha'))
        memory.create_team(Team(name='Mid', is_active=False))

        assert [t.name for t in memory.get_teams()] == ['Alpha', 'Mid', 'Zeta']
        assert [t.name for t in memory.get_active_teams()] == ['Alpha', 'Zeta']

    def test_team_update_and_lookup(self, memory):
        team = memory.create_team(Team(name='Alpha'))

        updated = memory.update_team(team.id, {'is_active': False})

        assert updated.is_active is False
        assert memory.get_team_by_name('Alpha').id == team.id
        assert memory.delete_team(team.id) is True
        assert memory.get_team(team.id) is None

    def test_users_by_username_and_role(self, memory):
        memory.create_user(User(username='boss', password_hash='x', role=UserRole.ADMIN))
        memory.create_user(User(username='lead', password_hash='x', role=UserRole.TEAM_LEADER))

        assert memory.get_user_by_username('boss').is_admin
        assert memory.get_user_by_username('nobody') is None
        assert [u.username for u in memory.get_all_users('team_leader')] == ['lead']
        assert [u.username for u in memory.get_all_users()] == ['boss', 'lead']
