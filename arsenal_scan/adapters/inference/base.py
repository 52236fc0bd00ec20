class InferenceAdapter:
    def identify(self, arsenal_b64: str, user_b64: str) -> dict[str, int]:
        """Return GridCount for the screenshot, raise InferenceFailure on any error.

        One outbound call per invocation, no retry, no caching.
        """
        raise NotImplementedError
