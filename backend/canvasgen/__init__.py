"""Turns assistant responses into placed visual content on an infinite canvas."""
