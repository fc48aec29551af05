"""
HTTP transport for the usage method channel.
"""
