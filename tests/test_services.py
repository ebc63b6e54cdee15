# tests/test_services.py
import unittest
from unittest.mock import patch

from team_directory.core.errors import ConflictError, NotFoundError
from team_directory.db.init_db import init_db
from team_directory.db.session import Database
from team_directory.models.team import Team
from team_directory.models.user import User
from team_directory.services import teams as team_service
from team_directory.services import users as user_service


class ServiceTestCase(unittest.TestCase):
    def setUp(self):
        self.database = Database("sqlite://")
        self.database.create_all()
        self.db = self.database.session()
        self.alice = self.add_user("alice@example.com")
        self.bob = self.add_user("bob@example.com")

    def tearDown(self):
        self.db.close()
        self.database.dispose()

    def add_user(self, email):
        return user_service.create_user(
            self.db, {"name": email.split("@")[0], "email": email, "password": "secret1", "role": "member"}
        )

    def test_team_is_not_created_when_member_assignment_fails(self):
        with patch.object(team_service, "_assign_members", side_effect=RuntimeError("lost connection")):
            with self.assertRaises(RuntimeError):
                team_service.create_team(self.db, {"name": "Eng", "users": [self.alice.id]})

        self.assertEqual(self.db.query(Team).count(), 0)
        self.assertIsNone(self.db.query(User).filter(User.id == self.alice.id).one().teamid)

    def test_team_update_is_rolled_back_when_member_assignment_fails(self):
        team = team_service.create_team(self.db, {"name": "Eng", "users": [self.alice.id]})
        team_id = team.id

        with patch.object(team_service, "_assign_members", side_effect=RuntimeError("lost connection")):
            with self.assertRaises(RuntimeError):
                team_service.update_team(self.db, team_id, {"name": "Renamed", "users": [self.bob.id]})

        self.assertEqual(team_service.get_team(self.db, team_id).name, "Eng")

    def test_last_member_guard(self):
        team = team_service.create_team(self.db, {"name": "Solo", "users": [self.alice.id]})

        with self.assertRaises(ConflictError):
            user_service.delete_user(self.db, self.alice.id)

        self.assertEqual(user_service.count_team_members(self.db, team.id), 1)
        self.assertEqual(user_service.get_user(self.db, self.alice.id).teamid, team.id)

    def test_delete_team_clears_member_references(self):
        team = team_service.create_team(self.db, {"name": "Eng", "users": [self.alice.id, self.bob.id]})
        team_id = team.id

        team_service.delete_team(self.db, team_id)

        with self.assertRaises(NotFoundError):
            team_service.get_team(self.db, team_id)
        self.assertEqual(user_service.count_team_members(self.db, team_id), 0)
        self.assertIsNone(user_service.get_user(self.db, self.alice.id).teamid)

    def test_unique_email_constraint_is_reported_as_conflict(self):
        # Skip the pre-check to reach the store's unique constraint
        with patch.object(user_service, "_ensure_email_available"):
            with self.assertRaises(ConflictError) as ctx:
                self.add_user("alice@example.com")

        self.assertEqual(ctx.exception.message, "Email already exists")
        self.assertEqual(self.db.query(User).count(), 2)

    def test_init_db_seeds_once(self):
        db = Database("sqlite://")
        db.create_all()
        session = db.session()
        try:
            self.assertTrue(init_db(session))
            self.assertFalse(init_db(session))

            team = session.query(Team).one()
            self.assertEqual(team.name, "Default Team")
            self.assertEqual(len(team.users), 2)
        finally:
            session.close()
            db.dispose()


if __name__ == '__main__':
    unittest.main()
