"""ClockWise Pro application layer: screen/session state machine over the backend SDK."""
