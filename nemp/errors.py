class NempError(Exception):
    pass


class RenderLoopError(NempError):
    """A render drain kept requesting passes past the configured limit."""

    def __init__(self, passes: int) -> None:
        super().__init__(
            f"rendering did not settle after {passes} passes; "
            "a component is probably setting state unconditionally"
        )
        self.passes = passes
