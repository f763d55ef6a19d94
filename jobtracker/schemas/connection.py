from datetime import datetime

from jobtracker.core.constants import ConnectionAction, ConnectionStatus
from jobtracker.schemas.application import SharedApplicationResponse
from jobtracker.schemas.common import CamelModel, PublicUser


class FollowRequest(CamelModel):
    recipient_id: str


class RespondRequest(CamelModel):
    connection_id: str
    action: ConnectionAction


class ConnectionResponse(CamelModel):
    id: str
    requester_id: str
    recipient_id: str
    status: ConnectionStatus
    created_at: datetime | None = None
    updated_at: datetime | None = None


class FollowResponse(CamelModel):
    message: str
    connection: ConnectionResponse


class RespondResponse(CamelModel):
    message: str
    connection: ConnectionResponse | None = None


class ExploreUser(PublicUser):
    connection_status: ConnectionStatus
    is_requester: bool
    connections_count: int


class UsersResponse(CamelModel):
    users: list[ExploreUser]


class PendingRequest(CamelModel):
    id: str
    requester: PublicUser
    status: ConnectionStatus
    created_at: datetime | None = None


class PendingRequestsResponse(CamelModel):
    requests: list[PendingRequest]


class MutualConnection(CamelModel):
    connection_id: str
    user: PublicUser
    connected_at: datetime | None = None


class ConnectionsResponse(CamelModel):
    connections: list[MutualConnection]


class UserProfileResponse(CamelModel):
    user: PublicUser
    connection_status: ConnectionStatus


class ConnectionProgressResponse(CamelModel):
    user: PublicUser
    companies: list[SharedApplicationResponse]
    total_applications: int
    status_breakdown: dict[str, int]
