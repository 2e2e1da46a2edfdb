"""Core pipeline, configuration, manifest and archive handling for naudit."""
