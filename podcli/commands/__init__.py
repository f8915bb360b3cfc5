"""podmerge command implementations."""
