"""
Status codes for operations throughout the application.
Using simple numeric constants for language-independent logic.
"""


class Status:
    """Status codes for all operations"""

    SUCCESS = 0
    FAILED = 1
    INVALID_DATA = 2
    READ_ERROR = 3
    BACKUP_ERROR = 4
    WRITE_ERROR = 5
    UNKNOWN = 9

    @classmethod
    def get_name(cls, code: int) -> str:
        """Get status name for debugging"""
        for name, value in cls.__dict__.items():
            if not name.startswith("_") and value == code:
                return name
        return "UNKNOWN"

    @classmethod
    def is_success(cls, code: int) -> bool:
        """Check if status code indicates success"""
        return code == cls.SUCCESS

    @classmethod
    def is_error(cls, code: int) -> bool:
        """Check if status code indicates an error"""
        return code in [
            cls.FAILED,
            cls.INVALID_DATA,
            cls.READ_ERROR,
            cls.BACKUP_ERROR,
            cls.WRITE_ERROR,
        ]

    @classmethod
    def file_unchanged(cls, code: int) -> bool:
        """Check if a failed save left the profile file as it was"""
        return code in [cls.INVALID_DATA, cls.READ_ERROR, cls.BACKUP_ERROR]
