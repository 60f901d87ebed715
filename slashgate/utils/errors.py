class VerificationError(Exception):
    """
    Base for every reason a slash-command request is rejected.

    Anything that is not an UnauthorizedError is structural (unreadable
    body, missing headers, unparseable form) and is answered with HTTP 400.
    """


class UnauthorizedError(VerificationError):
    """Signature or timestamp did not check out. Answered with HTTP 401."""


class StaleTimestampError(UnauthorizedError):
    """Timestamp outside the replay window, in the past or the future."""


class SignatureMismatchError(UnauthorizedError):
    pass


class MissingHeadersError(VerificationError):
    pass


class BodyReadError(VerificationError):
    pass


class ParseError(VerificationError):
    pass
