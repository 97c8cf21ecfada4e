# tests for the availability gate — mentor threshold, admin bypass, vent cooldown

import pytest
from datetime import datetime, timedelta, timezone

from app.services.gate import (
    check_cooldown,
    check_privileged_access,
    evaluate_access,
    evaluate_cooldown,
    is_privileged,
)
from tests.conftest import ADMIN_ID, USER_ID, WEEK_ID, FailingCollection, week_doc

T0 = datetime(2025, 11, 5, 8, 0, tzinfo=timezone.utc)


class TestPrivilegedFlag:
    """the admin flag is stored loosely"""

    @pytest.mark.parametrize("flag", [True, "true", 1, 1.0])
    def test_truthy_encodings(self, flag):
        assert is_privileged(flag) is True

    @pytest.mark.parametrize("flag", [None, False, "false", 0, 0.0, 2, 1.5, "yes", "True", [], {}])
    def test_everything_else_is_not_privileged(self, flag):
        assert is_privileged(flag) is False


class TestEvaluateAccess:
    """pure gate decision"""

    def test_four_sessions_not_enough(self):
        decision = evaluate_access(is_admin=False, vent_count=4)
        assert decision.available is False
        assert "1 more" in decision.reason

    def test_five_sessions_unlock(self):
        decision = evaluate_access(is_admin=False, vent_count=5)
        assert decision.available is True
        assert decision.reason == "Required vent sessions completed"

    def test_more_than_threshold_unlocks(self):
        assert evaluate_access(is_admin=False, vent_count=9).available is True

    def test_admin_bypasses_threshold(self):
        decision = evaluate_access(is_admin=True, vent_count=0)
        assert decision.available is True
        assert decision.reason == "Admin access"

    def test_zero_sessions_reason(self):
        decision = evaluate_access(is_admin=False, vent_count=0)
        assert decision.reason == "Need 5 more vent sessions"

    def test_custom_threshold(self):
        assert evaluate_access(is_admin=False, vent_count=2, threshold=2).available is True


class TestEvaluateCooldown:
    """12 hour spacing between vent sessions"""

    def test_no_previous_session(self):
        status = evaluate_cooldown(None, T0)
        assert status.can_start is True
        assert status.hours_remaining is None

    def test_just_under_twelve_hours(self):
        status = evaluate_cooldown(T0, T0 + timedelta(hours=11, minutes=59))
        assert status.can_start is False
        assert status.hours_remaining == pytest.approx(1 / 60)

    def test_exactly_twelve_hours(self):
        status = evaluate_cooldown(T0, T0 + timedelta(hours=12))
        assert status.can_start is True

    def test_remaining_hours_fractional(self):
        status = evaluate_cooldown(T0, T0 + timedelta(hours=3, minutes=30))
        assert status.hours_remaining == pytest.approx(8.5)
        assert status.last_session_at == T0.isoformat()

    def test_future_last_session_still_blocks(self):
        # a last-session timestamp in the future never yields negative elapsed time
        status = evaluate_cooldown(T0 + timedelta(hours=1), T0)
        assert status.can_start is False
        assert status.hours_remaining >= 0


class TestCheckPrivilegedAccess:
    """gate over stored user + week documents"""

    async def test_regular_user_below_threshold(self, store, mock_db):
        mock_db.weeks._data.append(week_doc(USER_ID, WEEK_ID, 4))
        decision = await check_privileged_access(store, USER_ID, WEEK_ID)
        assert decision.available is False
        assert decision.vent_count == 4
        assert decision.is_admin is False

    async def test_regular_user_at_threshold(self, store, mock_db):
        mock_db.weeks._data.append(week_doc(USER_ID, WEEK_ID, 5))
        decision = await check_privileged_access(store, USER_ID, WEEK_ID)
        assert decision.available is True

    async def test_admin_string_flag(self, store):
        decision = await check_privileged_access(store, ADMIN_ID, WEEK_ID)
        assert decision.available is True
        assert decision.is_admin is True
        assert decision.vent_count == 0

    async def test_admin_numeric_flag(self, store, mock_db):
        mock_db.users._data[0]["admin"] = 1
        decision = await check_privileged_access(store, USER_ID, WEEK_ID)
        assert decision.is_admin is True

    async def test_admin_double_flag(self, store, mock_db):
        mock_db.users._data.append({"_id": "users/u_dbl", "uid": "u_dbl", "admin": 1.0})
        decision = await check_privileged_access(store, "u_dbl", WEEK_ID)
        assert decision.is_admin is True
        assert decision.available is True
        assert decision.reason == "Admin access"

    async def test_admin_with_shell_edited_document(self, store, mock_db):
        mock_db.users._data.append({
            "_id": "users/u_shell",
            "admin": 1,
            "created_at": datetime(2025, 3, 1, tzinfo=timezone.utc),
        })
        decision = await check_privileged_access(store, "u_shell", WEEK_ID)
        assert decision.is_admin is True
        assert decision.available is True

    async def test_unknown_user_and_week(self, store):
        decision = await check_privileged_access(store, "ghost", WEEK_ID)
        assert decision.available is False
        assert decision.vent_count == 0

    async def test_read_failure_degrades(self, store, mock_db):
        mock_db.users = FailingCollection()
        mock_db.weeks = FailingCollection()
        decision = await check_privileged_access(store, ADMIN_ID, WEEK_ID)
        assert decision.available is False
        assert decision.vent_count == 0
        assert decision.is_admin is False

    async def test_gate_does_not_write(self, store, mock_db):
        await check_privileged_access(store, USER_ID, WEEK_ID)
        assert mock_db.weeks._data == []


class TestCheckCooldown:
    async def test_no_week_document(self, store):
        status = await check_cooldown(store, USER_ID, WEEK_ID, now=T0)
        assert status.can_start is True

    async def test_week_without_sessions(self, store, mock_db):
        mock_db.weeks._data.append(week_doc(USER_ID, WEEK_ID, 0))
        status = await check_cooldown(store, USER_ID, WEEK_ID, now=T0)
        assert status.can_start is True

    async def test_boundary(self, store, mock_db):
        mock_db.weeks._data.append(week_doc(USER_ID, WEEK_ID, 1, last_session_at=T0))
        early = await check_cooldown(store, USER_ID, WEEK_ID, now=T0 + timedelta(hours=11, minutes=59))
        on_time = await check_cooldown(store, USER_ID, WEEK_ID, now=T0 + timedelta(hours=12))
        assert early.can_start is False
        assert on_time.can_start is True

    async def test_read_failure_denies(self, store, mock_db):
        mock_db.weeks = FailingCollection()
        status = await check_cooldown(store, USER_ID, WEEK_ID, now=T0)
        assert status.can_start is False
