from sqlbuilder.naming.base import BaseNamingConvention


class IdentityNamingConvention(BaseNamingConvention):
    """Uses type and field names exactly as declared."""

    def transform(self, name: str) -> str:
        return name
