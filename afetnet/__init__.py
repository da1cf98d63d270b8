"""AfetNet earthquake feed and disaster simulation services."""
