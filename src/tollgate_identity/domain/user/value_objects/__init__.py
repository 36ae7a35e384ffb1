from tollgate_identity.domain.user.value_objects.user_role import UserRole

__all__ = ["UserRole"]
