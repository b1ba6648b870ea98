from authsvc.models.user import User

__all__ = ["User"]
