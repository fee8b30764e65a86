from .create_trip import CreateTripService
from .delete_trip import DeleteTripService
from .get_trip import GetTripService
from .manage_itinerary import ManageItineraryService
from .manage_participants import ManageParticipantsService
from .sync_participant_profile import SyncParticipantProfileService
from .update_trip import UpdateTripService

__all__ = [
    "CreateTripService",
    "UpdateTripService",
    "DeleteTripService",
    "GetTripService",
    "ManageParticipantsService",
    "ManageItineraryService",
    "SyncParticipantProfileService",
]
