"""Subjects, questions and the rules for ordering and browsing them."""
