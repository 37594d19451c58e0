"""
Dashboard tests
"""


class TestMemberDashboard:
    """GET /member/*"""

    async def test_empty_overview(self, client, member_headers):
        response = await client.get("/member/stats-and-upcoming-events", headers=member_headers)
        assert response.status_code == 200
        assert response.json() == {
            "totalClubs": 0,
            "totalEvents": 0,
            "totalPayments": 0,
            "upcomingEvents": [],
        }

    async def test_overview_counts_and_upcoming(
        self, client, approved_club, create_event, member_headers
    ):
        joined = await approved_club(name="Joined")
        other = await approved_club(name="Other")
        event = await create_event(joined["id"], title="Club Night")
        await create_event(other["id"], title="Elsewhere")

        await client.post(f"/clubs/join/{joined['id']}", headers=member_headers)
        await client.post(f"/events/register/{event['id']}", headers=member_headers)

        response = await client.get("/member/stats-and-upcoming-events", headers=member_headers)
        body = response.json()
        assert body["totalClubs"] == 1
        assert body["totalEvents"] == 1
        assert [e["title"] for e in body["upcomingEvents"]] == ["Club Night"]
        assert body["upcomingEvents"][0]["clubName"] == "Joined"

    async def test_member_clubs_include_club_details(self, client, approved_club, member_headers):
        club = await approved_club(name="Hiking Society", location="Trailhead")
        await client.post(f"/clubs/join/{club['id']}", headers=member_headers)

        response = await client.get("/member/clubs", headers=member_headers)
        items = response.json()
        assert len(items) == 1
        assert items[0]["clubName"] == "Hiking Society"
        assert items[0]["location"] == "Trailhead"

    async def test_manager_cannot_use_member_dashboard(self, client, manager_headers):
        response = await client.get("/member/clubs", headers=manager_headers)
        assert response.status_code == 403


class TestManagerDashboard:
    """GET /manager/stats"""

    async def test_no_clubs(self, client, manager_headers):
        response = await client.get("/manager/stats", headers=manager_headers)
        assert response.json() == {
            "totalClubs": 0,
            "totalMembers": 0,
            "totalEvents": 0,
            "totalRevenue": 0,
        }

    async def test_totals_over_own_clubs(
        self, client, approved_club, create_event, member_headers, manager_headers, payments
    ):
        free = await approved_club(name="Free")
        paid = await approved_club(name="Paid", membershipFee=12.5)
        await create_event(free["id"])

        await client.post(f"/clubs/join/{free['id']}", headers=member_headers)
        response = await client.post(
            "/payment/create-checkout-session",
            json={"clubId": paid["id"], "userEmail": "member@example.com"},
            headers=member_headers,
        )
        session_id = response.json()["sessionId"]
        payments.mark_paid(session_id)
        await client.get("/payment/success", params={"session_id": session_id})

        response = await client.get("/manager/stats", headers=manager_headers)
        assert response.json() == {
            "totalClubs": 2,
            "totalMembers": 2,
            "totalEvents": 1,
            "totalRevenue": 12.5,
        }


class TestAdminDashboard:
    """GET /admin/stats and /admin/payments"""

    async def test_platform_totals(
        self, client, create_club, approved_club, manager_headers, member_headers, admin_headers
    ):
        club = await approved_club()
        await create_club(manager_headers, name="Waiting")
        await client.post(f"/clubs/join/{club['id']}", headers=member_headers)

        response = await client.get("/admin/stats", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {
            "totalUsers": 3,
            "totalClubs": 2,
            "pendingClubs": 1,
            "approvedClubs": 1,
            "totalMemberships": 1,
            "totalEvents": 0,
            "totalRevenue": 0,
        }

    async def test_admin_only(self, client, member_headers):
        response = await client.get("/admin/stats", headers=member_headers)
        assert response.status_code == 403

        response = await client.get("/admin/payments", headers=member_headers)
        assert response.status_code == 403
