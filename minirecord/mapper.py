class RecordMapper:
    """Turns raw rows (column name -> value) into model instances."""

    def hydrate(self, model_class, row):
        # rows come from SQL built against the model's own table, so keys are not re-validated
        obj = model_class.__new__(model_class)
        obj._init_attributes()
        for name, value in row.items():
            obj._write_attribute(name, value)
        return obj

    def hydrate_all(self, model_class, rows):
        return [self.hydrate(model_class, row) for row in rows]
