"""
Stamp Duty

Transfer duty for residential purchases in each Australian state, with
first home buyer exemptions and concessions.

Each state is described by a bracket table: for a value inside a bracket
the duty is `base_amount + (value - previous_threshold) * rate`.
"""

import math
from dataclasses import dataclass
from typing import Optional, Union

from property_planner.models.property import StateCode
from property_planner.observability import get_logger
from property_planner.sync.number_format import round_half_up

logger = get_logger(__name__)


@dataclass(frozen=True)
class DutyBracket:
    threshold: float
    base_amount: float
    rate: float
    previous_threshold: float = 0.0


@dataclass(frozen=True)
class ConcessionRule:
    """Full exemption up to one value, graduated up to the other (if any)."""
    full_exemption_threshold: float
    full_duty_threshold: Optional[float] = None


@dataclass(frozen=True)
class StampDutyConfig:
    brackets: tuple[DutyBracket, ...]
    homes: Optional[ConcessionRule] = None
    land: Optional[ConcessionRule] = None
    minimum_duty: Optional[float] = None


_INF = math.inf

# VIC charges a flat 5.5% of the whole value between $960k and $2m
_VIC_FLAT_BRACKET = 2_000_000

STAMP_DUTY_CONFIGS: dict[StateCode, StampDutyConfig] = {
    StateCode.NSW: StampDutyConfig(
        minimum_duty=20,
        brackets=(
            DutyBracket(17_000, 0, 0.0125),
            DutyBracket(37_000, 212, 0.015, 17_000),
            DutyBracket(99_000, 512, 0.0175, 37_000),
            DutyBracket(372_000, 1_597, 0.035, 99_000),
            DutyBracket(1_240_000, 11_152, 0.045, 372_000),
            DutyBracket(_INF, 50_212, 0.055, 1_240_000),
        ),
        homes=ConcessionRule(800_000, 1_000_000),
        land=ConcessionRule(350_000, 450_000),
    ),
    StateCode.VIC: StampDutyConfig(
        brackets=(
            DutyBracket(25_000, 0, 0.014),
            DutyBracket(130_000, 350, 0.024, 25_000),
            DutyBracket(960_000, 2_870, 0.06, 130_000),
            DutyBracket(_VIC_FLAT_BRACKET, 0, 0.055),
            DutyBracket(_INF, 110_000, 0.065, 2_000_000),
        ),
        homes=ConcessionRule(600_000, 750_000),
        land=ConcessionRule(500_000),
    ),
    StateCode.QLD: StampDutyConfig(
        brackets=(
            DutyBracket(5_000, 0, 0),
            DutyBracket(75_000, 0, 0.015, 5_000),
            DutyBracket(540_000, 1_050, 0.035, 75_000),
            DutyBracket(1_000_000, 17_325, 0.045, 540_000),
            DutyBracket(_INF, 38_025, 0.0575, 1_000_000),
        ),
        homes=ConcessionRule(500_000, 550_000),
        land=ConcessionRule(250_000, 400_000),
    ),
    StateCode.SA: StampDutyConfig(
        brackets=(
            DutyBracket(12_000, 0, 0.01),
            DutyBracket(30_000, 120, 0.02, 12_000),
            DutyBracket(50_000, 480, 0.03, 30_000),
            DutyBracket(100_000, 1_080, 0.035, 50_000),
            DutyBracket(200_000, 2_830, 0.04, 100_000),
            DutyBracket(250_000, 6_830, 0.0425, 200_000),
            DutyBracket(300_000, 8_955, 0.045, 250_000),
            DutyBracket(500_000, 11_205, 0.05, 300_000),
            DutyBracket(_INF, 21_205, 0.055, 500_000),
        ),
        homes=ConcessionRule(600_000, 650_000),
    ),
    StateCode.WA: StampDutyConfig(
        brackets=(
            DutyBracket(120_000, 0, 0.019),
            DutyBracket(150_000, 2_280, 0.0285, 120_000),
            DutyBracket(360_000, 3_135, 0.038, 150_000),
            DutyBracket(725_000, 11_115, 0.049, 360_000),
            DutyBracket(_INF, 29_000, 0.051, 725_000),
        ),
        homes=ConcessionRule(430_000),
    ),
    StateCode.TAS: StampDutyConfig(
        brackets=(
            DutyBracket(3_000, 0, 0.0175),
            DutyBracket(25_000, 50, 0.0225, 3_000),
            DutyBracket(75_000, 545, 0.0355, 25_000),
            DutyBracket(200_000, 2_320, 0.04, 75_000),
            DutyBracket(375_000, 7_320, 0.0425, 200_000),
            DutyBracket(725_000, 14_758, 0.045, 375_000),
            DutyBracket(_INF, 30_508, 0.0455, 725_000),
        ),
        homes=ConcessionRule(600_000),
    ),
    StateCode.NT: StampDutyConfig(
        minimum_duty=20,
        brackets=(
            # Approximation of the NT formula
            DutyBracket(525_000, 0, 0.00443),
            DutyBracket(_INF, 0, 0.0485),
        ),
        homes=ConcessionRule(650_000),
    ),
    StateCode.ACT: StampDutyConfig(
        brackets=(
            DutyBracket(200_000, 0, 0.011),
            DutyBracket(300_000, 2_200, 0.024, 200_000),
            DutyBracket(500_000, 4_600, 0.038, 300_000),
            DutyBracket(750_000, 12_200, 0.043, 500_000),
            DutyBracket(1_000_000, 22_950, 0.045, 750_000),
            DutyBracket(_INF, 34_200, 0.046, 1_000_000),
        ),
        homes=ConcessionRule(600_000, 1_000_000),
    ),
}


def base_duty(value: float, state: StateCode) -> float:
    """Duty before any concession, to the cent."""
    config = STAMP_DUTY_CONFIGS[state]

    for bracket in config.brackets:
        if value > bracket.threshold:
            continue

        if state == StateCode.VIC and bracket.threshold == _VIC_FLAT_BRACKET and value > 960_000:
            return round_half_up(value * bracket.rate, 2)

        duty = round_half_up(
            bracket.base_amount + (value - bracket.previous_threshold) * bracket.rate, 2
        )
        if config.minimum_duty:
            return max(config.minimum_duty, duty)
        return duty

    return 0.0


def _apply_first_home_concession(duty: float, value: float, land: bool, state: StateCode) -> float:
    config = STAMP_DUTY_CONFIGS[state]
    rule = config.land if land else config.homes
    if rule is None:
        return duty

    exempt_to = rule.full_exemption_threshold
    full_from = rule.full_duty_threshold

    if value <= exempt_to:
        return 0.0
    if full_from is None or value >= full_from:
        return duty

    span = full_from - exempt_to

    if state == StateCode.NSW:
        # Exemption phases out linearly
        exemption_duty = base_duty(exempt_to, state)
        proportion = (full_from - value) / span
        return round_half_up(duty - proportion * exemption_duty)

    if state == StateCode.VIC:
        max_savings = base_duty(exempt_to, state)
        reduction = (value - exempt_to) / span * max_savings
        return round_half_up(duty - (max_savings - reduction))

    if state == StateCode.QLD and land:
        exemption_duty = base_duty(exempt_to, state)
        concession = exemption_duty * ((full_from - value) / span)
        return round_half_up(max(0.0, duty - concession))

    # QLD homes, SA, ACT
    concession_rate = (full_from - value) / span
    return round_half_up(duty * (1 - concession_rate))


def calculate_stamp_duty(
    value: Optional[float],
    first_home_buyer: bool = False,
    land: bool = False,
    state: Union[StateCode, str] = StateCode.NSW,
) -> float:
    """
    Stamp duty payable on a purchase.

    Args:
        value: Purchase price. Missing, zero or negative values pay nothing.
        first_home_buyer: Apply first home buyer exemptions/concessions.
        land: Vacant land (separate concession rules in some states).
        state: State code. Unknown codes fall back to NSW.
    """
    if value is None or not math.isfinite(value) or value <= 0:
        return 0.0

    try:
        state_code = StateCode(state)
    except ValueError:
        logger.warning("stamp_duty_unknown_state", state=str(state), fallback="NSW")
        state_code = StateCode.NSW

    duty = base_duty(value, state_code)
    if first_home_buyer:
        return _apply_first_home_concession(duty, value, land, state_code)
    return duty
