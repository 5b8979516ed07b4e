"""
Core application modules.
- bootstrap: Default admin creation on first start
- db: Tortoise ORM configuration and connection management
- errors: Typed chat failures and their HTTP mapping
- security: Password hashing and JWT access tokens
"""
