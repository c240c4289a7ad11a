from sportmate.schemas.base import CamelModel


class UserSummary(CamelModel):
    id: str
    name: str
    email: str
