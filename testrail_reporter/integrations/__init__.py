"""
Host test-runner integrations.
"""
