"""Configuration models for the dotfiles repository.

This module defines the Pydantic models representing the .chezmoi.yaml
document that drives template evaluation and module selection.
"""

from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)

# Target platforms as reported by chezmoi's .chezmoi.os
Platform = Literal["linux", "darwin", "windows"]

ALL_PLATFORMS: tuple[Platform, ...] = ("linux", "darwin", "windows")
UNIX_PLATFORMS: tuple[Platform, ...] = ("linux", "darwin")

# Closed union for extra module properties (e.g. zsh_extras, install_location)
ModuleValue = bool | int | float | str | None

_SUPPORTED_VALUE_TYPES = (bool, int, float, str, type(None))


class GitUser(BaseModel):
    """Git identity deployed into the user's gitconfig.

    Attributes:
        name: Commit author name.
        email: Commit author email.
    """

    model_config = ConfigDict(frozen=True)

    name: Annotated[str, Field(description="Commit author name")] = ""
    email: Annotated[str, Field(description="Commit author email")] = ""


class GitHubRepoRef(BaseModel):
    """Reference to the GitHub repository holding the dotfiles."""

    model_config = ConfigDict(frozen=True)

    user: str
    repo: str


class RepoPolicy(BaseModel):
    """Branch protection policy declared for the dotfiles repository.

    Attributes:
        protected_branches: Branches that reject direct pushes.
        required_approvals: Number of approving reviews required.
        required_checks: Status checks that must pass before merging.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    protected_branches: Annotated[
        list[str],
        Field(default_factory=list, alias="protectedBranches"),
    ]
    required_approvals: Annotated[int, Field(alias="requiredApprovals", ge=0)] = 0
    required_checks: Annotated[
        list[str],
        Field(default_factory=list, alias="requiredChecks"),
    ]


class ModuleState(BaseModel):
    """State of a single toggleable module.

    Besides the ``enabled`` flag a module may carry arbitrary named
    properties (``zsh_extras``, ``repo``, ...). They are kept as typed
    extras so templates can reference them as ``.modules.<name>.<prop>``.

    Attributes:
        enabled: Whether the module is switched on. Defaults to False
            when the document omits it.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    __pydantic_extra__: dict[str, ModuleValue]

    enabled: Annotated[bool, Field(description="Whether the module is enabled")] = False

    _invalid_structure: bool = PrivateAttr(default=False)
    _unsupported_properties: tuple[str, ...] = PrivateAttr(default=())

    @model_validator(mode="wrap")
    @classmethod
    def drop_unsupported_values(
        cls, value: Any, handler: ValidatorFunctionWrapHandler
    ) -> "ModuleState":
        """Neutralise malformed module entries instead of rejecting the document.

        A non-mapping module becomes an empty module, and properties
        holding lists or mappings are dropped. Both are remembered so
        validation can report them. ``enabled`` itself stays strict.
        """
        if isinstance(value, ModuleState):
            return value

        invalid_structure = False
        unsupported: list[str] = []
        if value is None:
            value = {}
        elif not isinstance(value, dict):
            invalid_structure = True
            value = {}
        else:
            unsupported = [
                key
                for key, item in value.items()
                if key != "enabled" and not isinstance(item, _SUPPORTED_VALUE_TYPES)
            ]
            value = {key: item for key, item in value.items() if key not in unsupported}

        state: ModuleState = handler(value)
        state._invalid_structure = invalid_structure
        state._unsupported_properties = tuple(unsupported)
        return state

    @property
    def invalid_structure(self) -> bool:
        """Whether the document gave a scalar or list instead of a mapping."""
        return self._invalid_structure

    @property
    def unsupported_properties(self) -> tuple[str, ...]:
        """Names of properties dropped because their values were lists or mappings."""
        return self._unsupported_properties

    @property
    def has_enabled_flag(self) -> bool:
        """Whether the source document set ``enabled`` explicitly."""
        return "enabled" in self.model_fields_set

    @property
    def properties(self) -> dict[str, ModuleValue]:
        """Extra properties other than ``enabled``."""
        return dict(self.__pydantic_extra__ or {})

    def get_property(self, name: str) -> ModuleValue:
        """Look up a property by name.

        Args:
            name: Property name; ``enabled`` returns the flag itself.

        Returns:
            The property value, or None if the module does not define it.
        """
        if name == "enabled":
            return self.enabled
        return (self.__pydantic_extra__ or {}).get(name)


class AgeConfig(BaseModel):
    """age encryption keys used by chezmoi for encrypted files."""

    model_config = ConfigDict(frozen=True)

    identity: str = ""
    recipient: str = ""


class ConfigData(BaseModel):
    """The ``data`` section exposed to templates.

    Attributes:
        git_user: Git identity (``gitUser``).
        windows: Platform flag set by the init template.
        github: Optional repository reference.
        repo_policy: Optional branch protection policy (``repoPolicy``).
        modules: Module name to module state. Required.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    git_user: Annotated[GitUser, Field(default_factory=GitUser, alias="gitUser")]
    windows: bool = False
    github: GitHubRepoRef | None = None
    repo_policy: Annotated[RepoPolicy | None, Field(alias="repoPolicy")] = None
    modules: Annotated[dict[str, ModuleState], Field(description="Module states")]

    @field_validator("modules", mode="before")
    @classmethod
    def treat_empty_modules_as_disabled(cls, value: object) -> object:
        """Accept a bare `name:` entry as a module with no properties."""
        if isinstance(value, dict):
            return {name: {} if state is None else state for name, state in value.items()}
        return value


class DotfilesConfig(BaseModel):
    """Complete parsed .chezmoi.yaml document.

    Instances are immutable snapshots; simulated variants are derived
    copies and never mutate the base configuration.
    """

    model_config = ConfigDict(frozen=True)

    data: ConfigData
    encryption: str | None = None
    age: AgeConfig | None = None

    @property
    def modules(self) -> dict[str, ModuleState]:
        """Shortcut for ``data.modules``."""
        return self.data.modules

    def is_module_enabled(self, name: str) -> bool:
        """Check whether a module exists and is enabled.

        Args:
            name: Module name.

        Returns:
            True only if the module is present and its flag is set.
        """
        module = self.data.modules.get(name)
        return module is not None and module.enabled

    def enabled_modules(self) -> set[str]:
        """Names of all enabled modules."""
        return {name for name, module in self.data.modules.items() if module.enabled}
