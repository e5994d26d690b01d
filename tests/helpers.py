"""Value types and sinks shared by the tests."""

from casework import ReportSink


class Point:
    """Structured value with a label that custom equality ignores."""

    def __init__(self, x, y, label=""):
        self.x = x
        self.y = y
        self.label = label


class CaselessString:
    def __init__(self, value):
        self.value = value

    def equal(self, other):
        return self.value.lower() == other.value.lower()


class RecordingSink(ReportSink):
    """Report sink that records every call it receives."""

    def __init__(self):
        self.events = []

    def begin_group(self, name, failed):
        self.events.append(("begin", name, failed))

    def add_leaf(self, name, failed, error=None):
        self.events.append(("leaf", name, failed, error))

    def end_group(self):
        self.events.append(("end",))
