"""Viewer instruction planning.

The planner converts one free-text viewer instruction into an ordered `Plan` of chargeable steps
(effects, donations, questions, memberships) that the payment/execution engine runs one by one.
"""

from src.planner.assembler import EmptyInputError, NoViablePlanError, PlannerError, plan_agent
from src.planner.schema import Action, MembershipPlan, Plan

__all__ = [
    "Action",
    "EmptyInputError",
    "MembershipPlan",
    "NoViablePlanError",
    "Plan",
    "PlannerError",
    "plan_agent",
]
