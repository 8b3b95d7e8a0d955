"""
Models module - domain types shared by services and schemas.

- accounts: Worker / Business tagged union
- application: Application lifecycle states and transitions
"""
