class MiniRecordError(Exception):
    pass


class SchemaError(MiniRecordError):
    """Table or column discovery failed."""


class UnknownAttributeError(MiniRecordError, AttributeError):
    def __init__(self, model_name, attribute):
        self.model_name = model_name
        self.attribute = attribute
        super().__init__(f"unknown attribute '{attribute}' for {model_name}")


class ConfigurationError(MiniRecordError):
    """Association or model declared or used incorrectly."""


class RecordStateError(MiniRecordError, ValueError):
    """Operation not allowed in the record's current state (new vs. persisted)."""
