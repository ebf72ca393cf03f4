"""Tests for app.services.risk.scoring -- rule table, thresholds, edge cases."""
from datetime import timedelta

import pytest

from app.models.enums import NotificationPriority, RiskLevel
from app.services.risk.scoring import assess_container_risk, days_until_lfd
from app.services.risk.data_model import to_utc

from tests.conftest import NOW


def iso(dt):
    return dt.isoformat()


class TestQuietContainer:

    def test_no_rules_fire(self, make_container):
        result = assess_container_risk(make_container(), NOW)
        assert result.risk_score == 0
        assert result.risk_level == RiskLevel.LOW
        assert result.risk_reasons == ()
        assert result.should_create_exception is False
        assert result.should_notify is False
        assert result.notification_priority == NotificationPriority.LOW


class TestEtaRule:

    def test_eta_passed_while_in_transit(self, make_container):
        container = make_container(eta=iso(NOW - timedelta(days=2, hours=3)))
        result = assess_container_risk(container, NOW)
        assert result.risk_score == 3
        assert result.risk_reasons == ("ETA passed 2 day(s) ago - container delayed",)

    def test_eta_passed_but_arrived(self, make_container):
        container = make_container(
            status="arrived",
            eta=iso(NOW - timedelta(days=2)),
            updated_at=NOW - timedelta(hours=2),
        )
        result = assess_container_risk(container, NOW)
        assert result.risk_score == 0

    @pytest.mark.parametrize("status", ["unloaded", "gate-out", "delivered"])
    def test_eta_ignored_after_arrival(self, make_container, status):
        container = make_container(status=status, eta=iso(NOW - timedelta(days=4)))
        assert assess_container_risk(container, NOW).risk_score == 0

    def test_future_eta(self, make_container):
        container = make_container(eta=iso(NOW + timedelta(days=3)))
        assert assess_container_risk(container, NOW).risk_score == 0

    def test_unparseable_eta_ignored(self, make_container):
        container = make_container(eta="next tuesday-ish")
        assert assess_container_risk(container, NOW).risk_score == 0


class TestLastFreeDayRule:

    def test_lfd_passed(self, make_container):
        container = make_container(last_free_day="2024-06-12")
        result = assess_container_risk(container, NOW)
        assert result.risk_score == 4
        assert result.risk_reasons == ("Demurrage accruing - 3 day(s) past LFD",)

    def test_lfd_today(self, make_container):
        container = make_container(last_free_day="2024-06-15")
        result = assess_container_risk(container, NOW)
        assert result.risk_score == 3
        assert result.risk_reasons == ("LFD is TODAY - immediate action required",)

    def test_lfd_today_ignores_time_of_day(self, make_container):
        container = make_container(last_free_day="2024-06-15T00:30:00Z")
        result = assess_container_risk(container, NOW)
        assert result.risk_reasons == ("LFD is TODAY - immediate action required",)

    @pytest.mark.parametrize("lfd,days", [("2024-06-16", 1), ("2024-06-17", 2)])
    def test_lfd_imminent(self, make_container, lfd, days):
        result = assess_container_risk(make_container(last_free_day=lfd), NOW)
        assert result.risk_score == 2
        assert result.risk_reasons == (f"LFD in {days} day(s)",)

    def test_lfd_far_out(self, make_container):
        result = assess_container_risk(make_container(last_free_day="2024-06-18"), NOW)
        assert result.risk_score == 0

    @pytest.mark.parametrize("lfd", ["2024-06-10", "2024-06-15", "2024-06-16"])
    def test_at_most_one_lfd_reason(self, make_container, lfd):
        result = assess_container_risk(make_container(last_free_day=lfd), NOW)
        lfd_reasons = [r for r in result.risk_reasons if "LFD" in r]
        assert len(lfd_reasons) == 1

    def test_days_until_lfd(self):
        assert days_until_lfd("2024-06-20", NOW) == 5
        assert days_until_lfd("2024-06-10", NOW) == -5
        assert days_until_lfd(None, NOW) is None
        assert days_until_lfd("not a date", NOW) is None


class TestStatusRules:

    def test_customs_clearance(self, make_container):
        result = assess_container_risk(make_container(status="customs-clearance"), NOW)
        assert result.risk_score == 2
        assert result.risk_reasons == ("In customs clearance",)

    def test_active_holds(self, make_container):
        result = assess_container_risk(make_container(hold_types=["CUSTOMS", "FREIGHT"]), NOW)
        assert result.risk_score == 2
        assert result.risk_reasons == ("Active holds: CUSTOMS, FREIGHT",)

    def test_marked_delayed(self, make_container):
        result = assess_container_risk(make_container(status="delayed"), NOW)
        assert result.risk_score == 2
        assert result.risk_reasons == ("Container marked as delayed",)


class TestStaleTrackingRule:

    def test_stale_while_moving(self, make_container):
        container = make_container(updated_at=NOW - timedelta(hours=49))
        result = assess_container_risk(container, NOW)
        assert result.risk_score == 1
        assert result.risk_reasons == ("No tracking updates for 48+ hours",)

    def test_exactly_48_hours_not_stale(self, make_container):
        container = make_container(updated_at=NOW - timedelta(hours=48))
        assert assess_container_risk(container, NOW).risk_score == 0

    def test_stale_ignored_at_terminal(self, make_container):
        container = make_container(status="at-terminal", updated_at=NOW - timedelta(days=10))
        assert assess_container_risk(container, NOW).risk_score == 0


class TestLongTransitRule:

    def test_long_planned_transit(self, make_container):
        container = make_container(
            created_at=NOW - timedelta(days=10),
            eta=iso(NOW + timedelta(days=25)),
        )
        result = assess_container_risk(container, NOW)
        assert result.risk_score == 1
        assert result.risk_reasons == ("Long planned transit: 35 days",)

    def test_thirty_days_not_long(self, make_container):
        container = make_container(
            created_at=NOW - timedelta(days=10),
            eta=iso(NOW + timedelta(days=20)),
        )
        assert assess_container_risk(container, NOW).risk_score == 0


class TestGateOutRule:

    def test_arrived_three_days_ago(self, make_container):
        container = make_container(status="arrived", updated_at=NOW - timedelta(days=3))
        result = assess_container_risk(container, NOW)
        assert result.risk_score == 2
        assert result.risk_reasons == ("Arrived 3 days ago, not gated out",)

    def test_arrived_recently(self, make_container):
        container = make_container(status="arrived", updated_at=NOW - timedelta(days=2, hours=23))
        assert assess_container_risk(container, NOW).risk_score == 0


class TestScenarios:

    def test_lfd_passed_with_customs_hold(self, make_container):
        container = make_container(
            status="at-terminal",
            last_free_day="2024-06-12",
            hold_types=["CUSTOMS"],
        )
        result = assess_container_risk(container, NOW)
        assert result.risk_score == 6
        assert result.risk_level == RiskLevel.HIGH
        assert result.should_create_exception is True
        assert result.should_notify is True
        assert result.notification_priority == NotificationPriority.HIGH
        assert result.risk_reasons == (
            "Demurrage accruing - 3 day(s) past LFD",
            "Active holds: CUSTOMS",
        )

    def test_critical_combination(self, make_container):
        container = make_container(
            status="customs-clearance",
            eta=iso(NOW - timedelta(days=1)),
            last_free_day="2024-06-14",
        )
        result = assess_container_risk(container, NOW)
        assert result.risk_score == 9
        assert result.risk_level == RiskLevel.CRITICAL
        assert result.notification_priority == NotificationPriority.URGENT

    def test_single_point_is_low(self, make_container):
        container = make_container(updated_at=NOW - timedelta(days=3))
        result = assess_container_risk(container, NOW)
        assert result.risk_level == RiskLevel.LOW
        assert result.should_create_exception is False

    def test_reason_joins(self, make_container):
        container = make_container(status="customs-clearance", hold_types=["CUSTOMS"])
        result = assess_container_risk(container, NOW)
        assert result.risk_reason == "In customs clearance; Active holds: CUSTOMS"
        assert result.description == "In customs clearance. Active holds: CUSTOMS"


class TestProperties:

    def test_deterministic(self, make_container):
        container = make_container(status="delayed", last_free_day="2024-06-16")
        assert assess_container_risk(container, NOW) == assess_container_risk(container, NOW)

    def test_adding_hold_never_lowers_score(self, make_container):
        base = make_container(status="customs-clearance", last_free_day="2024-06-16")
        with_hold = make_container(
            status="customs-clearance",
            last_free_day="2024-06-16",
            hold_types=["USDA"],
        )
        assert assess_container_risk(with_hold, NOW).risk_score > assess_container_risk(base, NOW).risk_score

    def test_naive_timestamps_read_as_utc(self):
        assert to_utc("2024-06-15T12:00:00") == NOW


class TestCanonicalScenarios:

    def test_eta_missed_yesterday(self, make_container):
        container = make_container(eta=iso(NOW - timedelta(days=1)))
        result = assess_container_risk(container, NOW)

        assert result.risk_score == 3
        assert result.risk_level == RiskLevel.MEDIUM
        assert result.should_create_exception is True
        assert result.should_notify is True
        assert result.risk_reasons == ("ETA passed 1 day(s) ago - container delayed",)

    def test_lfd_three_days_past_at_terminal(self, make_container):
        from app.services.risk.classification import exception_type_for, notification_type_for

        container = make_container(status="at-terminal", last_free_day="2024-06-12")
        result = assess_container_risk(container, NOW)

        assert result.risk_score == 4
        assert result.risk_level == RiskLevel.HIGH
        assert result.notification_priority == NotificationPriority.HIGH
        assert exception_type_for(result.risk_reasons).value == "DEMURRAGE_RISK"
        assert notification_type_for(result.risk_reasons).value == "DEMURRAGE_ALERT"

    def test_customs_clearance_with_customs_hold(self, make_container):
        from app.services.risk.classification import exception_type_for

        container = make_container(status="customs-clearance", hold_types=["Customs Hold"])
        result = assess_container_risk(container, NOW)

        assert result.risk_score == 4
        assert result.risk_level == RiskLevel.HIGH
        assert "In customs clearance" in result.risk_reasons
        assert "Active holds: Customs Hold" in result.risk_reasons
        assert exception_type_for(result.risk_reasons).value == "CUSTOMS_ISSUE"
