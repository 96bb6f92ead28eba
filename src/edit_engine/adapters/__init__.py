"""Host integrations that implement ``TextSource`` for concrete widgets."""
