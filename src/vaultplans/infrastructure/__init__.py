"""Infrastructure layer — remote vault gateway and its adapters."""
