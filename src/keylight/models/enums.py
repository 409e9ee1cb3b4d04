"""Closed vocabularies shared by submissions and projects."""

from enum import Enum


class BuyerCategory(str, Enum):
    """Who is building: an individual or a commercial developer."""

    HOMEBUYER = "homebuyer"
    DEVELOPER = "developer"


class FinancingPlan(str, Enum):
    SELF_FUNDING = "self_funding"
    FINANCE_BUILD = "finance_build"


class LandStatus(str, Enum):
    """Whether the buyer already owns a building lot."""

    OWN_LAND = "own_land"
    NEED_LAND = "need_land"


class BuildBudget(str, Enum):
    FROM_200K_TO_250K = "200k_250k"
    FROM_250K_TO_350K = "250k_350k"
    FROM_350K_TO_400K = "350k_400k"
    FROM_400K_TO_500K = "400k_500k"
    OVER_500K = "500k_plus"


class ConstructionTimeline(str, Enum):
    LESS_THAN_3_MONTHS = "less_than_3_months"
    FROM_3_TO_6_MONTHS = "3_to_6_months"
    FROM_6_TO_12_MONTHS = "6_to_12_months"
    MORE_THAN_12_MONTHS = "more_than_12_months"


class SubmissionStatus(str, Enum):
    """Review state of a submission.

    Any status may move to any other status; only membership is checked.
    """

    NEW = "new"
    REVIEWED = "reviewed"
    QUALIFIED = "qualified"
    DISQUALIFIED = "disqualified"
    CONTACTED = "contacted"


class ProjectStatus(str, Enum):
    PLANNING = "planning"


def enum_values(enum_cls: type[Enum]) -> list[str]:
    """List the raw values of an enum, in declaration order."""
    return [member.value for member in enum_cls]
