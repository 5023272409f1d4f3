"""Terminal viewer for Graphite branch stacks."""
