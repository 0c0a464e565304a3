import base64

from pydantic import BaseModel, ConfigDict


class Auth(BaseModel):
    """Username and password for HTTP Basic authentication.

    An empty username means no authentication is applied.
    """

    model_config = ConfigDict(frozen=True)

    username: str = ""
    password: str = ""

    @property
    def enabled(self) -> bool:
        return self.username != ""

    def header_value(self) -> str:
        credentials = f"{self.username}:{self.password}".encode("utf-8")
        return f"Basic {base64.b64encode(credentials).decode('ascii')}"

    def __repr__(self) -> str:
        """Override repr to prevent accidental password exposure in logs."""
        masked = "***" if self.password else ""
        return f"Auth(username={self.username!r}, password={masked!r})"

    def __str__(self) -> str:
        return self.__repr__()
