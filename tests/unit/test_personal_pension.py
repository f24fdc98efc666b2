"""Unit tests for pension savings account helpers."""

from __future__ import annotations

import pytest

from pensionkr.backend.app.services.calculators import personal_pension


def test_contribution_room_with_full_credit_use(config) -> None:
    room = personal_pension.contribution_room(config, 6_000_000, 3_000_000)

    assert room.contributed == 9_000_000
    assert room.remaining == 9_000_000
    assert room.credit_room == 0


def test_contribution_room_never_negative(config) -> None:
    room = personal_pension.contribution_room(config, 10_000_000, 10_000_000)

    assert room.remaining == 0
    assert room.credit_room == 0


def test_contribution_room_reports_unused_credit(config) -> None:
    room = personal_pension.contribution_room(config, 2_000_000, 0)

    assert room.remaining == 16_000_000
    assert room.credit_room == 7_000_000


def test_isa_transfer_credit_is_capped(config) -> None:
    credit = personal_pension.isa_transfer_credit(config, 50_000_000, 40_000_000)

    assert credit.extra_deductible == pytest.approx(3_000_000)
    assert credit.credit_amount == 495_000


def test_isa_transfer_credit_high_salary_rate(config) -> None:
    credit = personal_pension.isa_transfer_credit(config, 20_000_000, 70_000_000)

    assert credit.extra_deductible == pytest.approx(2_000_000)
    assert credit.rate == pytest.approx(0.132)
    assert credit.credit_amount == 264_000


def test_early_withdrawal_tax(config) -> None:
    result = personal_pension.early_withdrawal_tax(config, 10_000_000)

    assert result.tax == 1_650_000
    assert result.net_amount == pytest.approx(8_350_000)
