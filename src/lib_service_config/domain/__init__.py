"""Domain layer: configuration record, validation rules and error taxonomy."""
