from tirthyatra.trip.service import TripPlannerService

__all__ = ["TripPlannerService"]
