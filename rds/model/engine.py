import enum


class EngineFamily(enum.Enum):
    MYSQL = "mysql"
    MARIADB = "mariadb"
    POSTGRES = "postgres"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_engine(cls, engine: str) -> "EngineFamily":
        "Maps the engine name reported by the service onto a family"

        for family in cls:
            if family is not cls.UNSUPPORTED and family.value == engine:
                return family

        return cls.UNSUPPORTED
