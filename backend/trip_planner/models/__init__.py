"""
Models package for database schemas
"""

from trip_planner.models.itinerary import Activity, CostSummary, DayCost, DayPlan
from trip_planner.models.trip import Trip, TripSummary
from trip_planner.models.user import User

__all__ = ["Trip", "TripSummary", "DayPlan", "Activity", "CostSummary", "DayCost", "User"]
