"""Service layer: directive processing and the editor session facade."""
