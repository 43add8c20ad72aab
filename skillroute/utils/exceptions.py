class SkillRouteError(Exception):
    """Base exception for the skill routing engine."""


class ParseError(SkillRouteError):
    def __init__(self, document: str, detail: str):
        self.document = document
        super().__init__(f"Failed to parse skill document '{document}': {detail}")


class DuplicateIDError(SkillRouteError):
    def __init__(self, skill_id: str, documents: list[str]):
        self.skill_id = skill_id
        self.documents = documents
        super().__init__(
            f"Skill id '{skill_id}' declared more than once: {', '.join(documents)}"
        )


class SkillNotFoundError(SkillRouteError):
    def __init__(self, skill_id: str):
        self.skill_id = skill_id
        super().__init__(f"Skill not found: {skill_id}")


class CatalogNotLoadedError(SkillRouteError):
    pass
