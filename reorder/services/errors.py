"""Errors raised by the reorder services."""


class InvalidNonceError(Exception):
    """The anti-forgery token is missing, tampered with, expired or issued for something else."""


class MalformedOrderError(ValueError):
    """The submitted order could not be parsed into a list of post ids."""


class OutOfScopeError(ValueError):
    """Some submitted ids do not belong to the partition the page was issued for."""

    def __init__(self, post_ids: list[int]):
        self.post_ids = post_ids
        super().__init__(
            "Posts not found in this list: " + ", ".join(str(i) for i in post_ids)
        )
