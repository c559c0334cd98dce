"""
Core domain types for the Medlink bot.
"""
