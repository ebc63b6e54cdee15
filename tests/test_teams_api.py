# tests/test_teams_api.py
import unittest

from api_testcase import ApiTestCase
from team_directory.models.team import Team
from team_directory.models.user import User


class TeamApiTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.alice = self.create_user("alice@example.com", name="Alice")
        self.bob = self.create_user("bob@example.com", name="Bob", role="admin")

    def teamid_of(self, user_id):
        self.db.expire_all()
        return self.db.query(User).filter(User.id == user_id).one().teamid

    def test_create_team_assigns_every_listed_user(self):
        response = self.client.post(
            "/api/teams", json={"name": "Eng", "users": [self.alice["id"], self.bob["id"]]}
        )

        self.assertEqual(response.status_code, 201, response.text)
        team = response.json()
        self.assertEqual(team["name"], "Eng")
        self.assertIsNone(team["description"])
        self.assertEqual([u["id"] for u in team["users"]], [self.alice["id"], self.bob["id"]])
        for member in team["users"]:
            self.assertEqual(member["teamid"], team["id"])
            self.assertNotIn("password", member)
        self.assertEqual(self.teamid_of(self.alice["id"]), team["id"])
        self.assertEqual(self.teamid_of(self.bob["id"]), team["id"])

    def test_member_projection(self):
        team = self.create_team("Eng", [self.bob["id"]])

        member = team["users"][0]
        self.assertEqual(
            set(member), {"id", "name", "email", "role", "teamid", "created_at"}
        )
        self.assertEqual(member["role"], "admin")

    def test_duplicate_team_name_is_rejected(self):
        self.create_team("Eng", [self.alice["id"]])

        response = self.client.post("/api/teams", json={"name": "Eng", "users": [self.bob["id"]]})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Team name already exists"})
        self.assertEqual(self.db.query(Team).filter(Team.name == "Eng").count(), 1)
        self.assertIsNone(self.teamid_of(self.bob["id"]))

    def test_unknown_member_fails_the_whole_create(self):
        response = self.client.post("/api/teams", json={"name": "Eng", "users": [self.alice["id"], 999]})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Some users do not exist"})
        self.assertEqual(self.db.query(Team).count(), 0)
        self.assertIsNone(self.teamid_of(self.alice["id"]))

    def test_validation_errors_use_errors_key(self):
        response = self.client.post("/api/teams", json={"name": "", "users": []})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"errors": [
            "Team name cannot be empty",
            "At least one user is required in the team",
        ]})

    def test_repeated_member_ids_count_once(self):
        team = self.create_team("Eng", [self.alice["id"], self.alice["id"]])

        self.assertEqual([u["id"] for u in team["users"]], [self.alice["id"]])

    def test_creating_a_team_moves_users_out_of_their_previous_team(self):
        first = self.create_team("First", [self.alice["id"], self.bob["id"]])
        second = self.create_team("Second", [self.alice["id"]])

        self.assertEqual(self.teamid_of(self.alice["id"]), second["id"])
        previous = self.client.get(f"/api/teams/{first['id']}").json()
        self.assertEqual([u["id"] for u in previous["users"]], [self.bob["id"]])

    def test_get_and_list_teams(self):
        eng = self.create_team("Eng", [self.alice["id"]], description="Engineering")
        ops = self.create_team("Ops", [self.bob["id"]])

        fetched = self.client.get(f"/api/teams/{eng['id']}")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.json()["description"], "Engineering")
        self.assertEqual(fetched.json()["users"][0]["email"], "alice@example.com")

        teams = self.client.get("/api/teams").json()
        self.assertEqual([t["id"] for t in teams], [eng["id"], ops["id"]])

    def test_get_missing_team(self):
        response = self.client.get("/api/teams/42")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Team not found"})

    def test_update_team(self):
        team = self.create_team("Eng", [self.alice["id"]])

        response = self.client.put(
            f"/api/teams/{team['id']}",
            json={"name": "Engineering", "description": "Builds things", "users": [self.bob["id"]]},
        )

        self.assertEqual(response.status_code, 200, response.text)
        body = response.json()
        self.assertEqual(body["name"], "Engineering")
        self.assertEqual(body["description"], "Builds things")
        # Listed users join; existing members are kept
        self.assertEqual(
            sorted(u["id"] for u in body["users"]), sorted([self.alice["id"], self.bob["id"]])
        )

    def test_update_keeping_the_same_name(self):
        team = self.create_team("Eng", [self.alice["id"]])

        response = self.client.put(f"/api/teams/{team['id']}", json={"name": "Eng", "users": [self.alice["id"]]})

        self.assertEqual(response.status_code, 200)

    def test_update_to_another_teams_name(self):
        self.create_team("Eng", [self.alice["id"]])
        ops = self.create_team("Ops", [self.bob["id"]])

        response = self.client.put(f"/api/teams/{ops['id']}", json={"name": "Eng", "users": [self.bob["id"]]})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Team name already exists"})

    def test_update_with_unknown_member_changes_nothing(self):
        team = self.create_team("Eng", [self.alice["id"]])

        response = self.client.put(
            f"/api/teams/{team['id']}", json={"name": "Renamed", "users": [self.bob["id"], 999]}
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"message": "Some users do not exist"})
        self.assertEqual(self.client.get(f"/api/teams/{team['id']}").json()["name"], "Eng")
        self.assertIsNone(self.teamid_of(self.bob["id"]))

    def test_update_missing_team(self):
        response = self.client.put("/api/teams/42", json={"name": "Eng", "users": [self.alice["id"]]})

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Team not found"})

    def test_update_validation_errors(self):
        team = self.create_team("Eng", [self.alice["id"]])

        response = self.client.put(f"/api/teams/{team['id']}", json={"name": "Eng"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"errors": ["Users list is required"]})

    def test_delete_team_releases_members(self):
        team = self.create_team("Eng", [self.alice["id"], self.bob["id"]])

        response = self.client.delete(f"/api/teams/{team['id']}")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"message": "Team deleted successfully"})
        self.assertEqual(self.client.get(f"/api/teams/{team['id']}").status_code, 404)
        alice = self.client.get(f"/api/users/{self.alice['id']}").json()
        self.assertIsNone(alice["teamid"])
        self.assertIsNone(alice["team"])

    def test_released_user_can_be_deleted(self):
        team = self.create_team("Eng", [self.alice["id"]])
        self.client.delete(f"/api/teams/{team['id']}")

        response = self.client.delete(f"/api/users/{self.alice['id']}")

        self.assertEqual(response.status_code, 200)

    def test_delete_missing_team(self):
        response = self.client.delete("/api/teams/42")

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Team not found"})

    def test_team_id_too_large_for_the_store(self):
        huge = 99999999999999999999

        self.assertEqual(self.client.get(f"/api/teams/{huge}").status_code, 404)
        self.assertEqual(self.client.delete(f"/api/teams/{huge}").status_code, 404)
        response = self.client.put(f"/api/teams/{huge}", json={"name": "Eng", "users": [self.alice["id"]]})
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Team not found"})

    def test_member_id_too_large_for_the_store(self):
        response = self.client.post("/api/teams", json={"name": "Eng", "users": [99999999999999999999]})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"errors": ["Users must be a list of integer ids"]})
        self.assertEqual(self.db.query(Team).count(), 0)

    def test_boolean_member_id_does_not_pick_user_one(self):
        response = self.client.post("/api/teams", json={"name": "Eng", "users": [True]})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"errors": ["Users must be a list of integer ids"]})
        self.assertIsNone(self.teamid_of(self.alice["id"]))


if __name__ == '__main__':
    unittest.main()
