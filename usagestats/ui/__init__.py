"""Qt user interface for the usage-access remediation surface."""
