"""Document store backends implementing core.protocols.DocumentStore."""
