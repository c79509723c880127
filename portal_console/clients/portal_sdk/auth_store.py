class AuthStore:
    def __init__(self, token: str | None = None) -> None:
        self.token = token

    def set_token(self, token: str) -> None:
        self.token = token

    def get_token(self) -> str | None:
        return self.token

    def clear(self) -> None:
        self.token = None
