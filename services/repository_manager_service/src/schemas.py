from typing import Dict, Any, Optional, List
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum

class RepositoryType(str, Enum):
    VCS = "vcs"
    GIT = "git"
    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"
    SVN = "svn"
    HG = "hg"
    FOSSIL = "fossil"
    PERFORCE = "perforce"
    PEAR = "pear"
    COMPOSER = "composer"
    ARTIFACT = "artifact"
    PATH = "path"
    PACKAGE = "package"

class RepositoryEntry(BaseModel):
    """One registered upstream source, keyed by its id."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: str = Field(..., description="Unique repository identifier")
    type: RepositoryType = Field(RepositoryType.VCS, description="Repository kind")
    url: Optional[str] = Field(None, description="Source location, for every type but 'package'")
    package: Optional[Dict[str, Any]] = Field(None, description="Inline package definition, for type 'package'")
    installation_source: Optional[str] = Field(
        None, alias="installation-source", description="Preferred installation source (dist or source)"
    )

    def clean_up(self) -> "RepositoryEntry":
        """
        Clears the field the entry's type does not use: 'package' entries
        lose their url, every other type loses its package definition.
        """
        if self.type != RepositoryType.PACKAGE:
            self.package = None
        else:
            self.url = None
        return self

class Configuration(BaseModel):
    """The persisted document: document settings plus the ordered repositories."""

    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, description="Registry name")
    homepage: Optional[str] = Field(None, description="Registry homepage")
    repositories: Dict[str, RepositoryEntry] = Field(
        default_factory=dict, description="Repository entries keyed by id, in insertion order"
    )

    @classmethod
    def from_document(cls, data: Dict[str, Any]) -> "Configuration":
        """
        Builds a configuration from its serialized form, where repositories
        are stored as a list. A repeated id replaces the earlier entry.
        """
        document = dict(data)
        repositories: Dict[str, RepositoryEntry] = {}
        for raw in document.pop("repositories", None) or []:
            entry = RepositoryEntry.model_validate(raw)
            repositories[entry.id] = entry
        return cls(repositories=repositories, **document)

    def to_document(self) -> Dict[str, Any]:
        document = self.model_dump(exclude={"repositories"})
        for field in ("name", "homepage"):
            if document.get(field) is None:
                document.pop(field, None)
        repositories: List[Dict[str, Any]] = [
            entry.model_dump(by_alias=True, exclude_none=True, mode="json")
            for entry in self.repositories.values()
        ]
        document["repositories"] = repositories
        return document
