"""Request mapping, dispatch and report formatting."""
