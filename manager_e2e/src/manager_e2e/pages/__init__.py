"""Page objects and locator candidates for the manager console."""
