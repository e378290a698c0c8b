from jobportal.schemas.common import ApiResponse, CamelModel

__all__ = ["ApiResponse", "CamelModel"]
