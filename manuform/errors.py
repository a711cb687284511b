class ConfigurationError(ValueError):
    pass

class InvalidGridReference(ConfigurationError):
    def __init__(self, column, row, reason="not a populated key slot"):
        self.column = column
        self.row = row
        super().__init__("key ({}, {}) is {}".format(column, row, reason))

class DegenerateHullError(ValueError):
    pass
