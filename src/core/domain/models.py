"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Validation happens once, when a request or artifact enters the Core.
- Handles and requests are frozen, so nothing downstream can retarget them.

Note:
- These models describe *what* is inspected, not *how* it is fetched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, JsonValue, field_validator, model_validator
from pydantic.config import ConfigDict

from core.domain.errors import InspectError, InvalidRequestError

JSON_FORMAT_MARKER = "json"

InspectionRecord = dict[str, JsonValue]


class InspectKind(str, Enum):
    """Which object kinds an identifier may resolve to."""

    CONTAINER = "container"
    IMAGE = "image"
    ALL = "all"

    @classmethod
    def parse(cls, token: "InspectKind | str") -> "InspectKind":
        """Map a CLI token to a kind, rejecting anything unknown."""

        if isinstance(token, cls):
            return token
        try:
            return cls(str(token).strip().lower())
        except ValueError:
            raise InvalidRequestError(
                f"the only recognized types are {cls.CONTAINER.value!r}, "
                f"{cls.IMAGE.value!r}, and {cls.ALL.value!r}"
            ) from None


class InspectionRequest(BaseModel):
    """One invocation of the inspector.

    Construction fails with `InvalidRequestError` (not a pydantic
    `ValidationError`) when the names/--latest combination is unusable, so
    the check always runs before any store lookup.
    """

    model_config = ConfigDict(frozen=True)

    names: tuple[str, ...] = Field(
        default=(),
        description="Identifiers in output order; duplicates allowed.",
    )
    kind: InspectKind = Field(default=InspectKind.ALL)
    include_size: bool = Field(
        default=False,
        description="Compute container size accounting (containers only).",
    )
    use_latest: bool = Field(
        default=False,
        description="Target the most recently created container instead of names.",
    )
    format: str = Field(
        default="",
        description="Empty or 'json' for a JSON array, otherwise a template.",
    )

    @field_validator("kind", mode="before")
    @classmethod
    def _parse_kind(cls, value: Any) -> InspectKind:
        return InspectKind.parse(value)

    @model_validator(mode="after")
    def _check_targets(self) -> "InspectionRequest":
        if not self.names and not self.use_latest:
            raise InvalidRequestError(
                "container or image name must be specified: "
                "podspect inspect [options [...]] name"
            )
        if self.names and self.use_latest:
            raise InvalidRequestError("you cannot provide additional arguments with --latest")
        return self


class ContainerHandle(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["container"] = "container"
    id: str = Field(..., min_length=1)
    identifier: str = Field(..., description="Name or ID the user typed.")
    name: str | None = None


class ImageHandle(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["image"] = "image"
    id: str = Field(..., min_length=1)
    identifier: str = Field(..., description="Name or ID the user typed.")


ResolvedEntity = Annotated[Union[ContainerHandle, ImageHandle], Field(discriminator="kind")]


class CreateConfig(BaseModel):
    """Decoded `create-config` artifact recorded when a container was created.

    Only the fields the inspect merge needs are typed; everything else the
    engine wrote is preserved as extra data.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str | None = Field(default=None, alias="Name")
    image: str | None = Field(default=None, alias="Image")
    image_id: str | None = Field(default=None, alias="ImageID")
    command: list[str] | None = Field(default=None, alias="Command")
    entrypoint: list[str] | None = Field(default=None, alias="Entrypoint")
    env: dict[str, str] | None = Field(default=None, alias="Env")
    labels: dict[str, str] | None = Field(default=None, alias="Labels")
    user: str | None = Field(default=None, alias="User")
    work_dir: str | None = Field(default=None, alias="WorkDir")
    tty: bool | None = Field(default=None, alias="Tty")
    stop_signal: int | None = Field(default=None, alias="StopSignal")
    hostname: str | None = Field(default=None, alias="Hostname")
    privileged: bool | None = Field(default=None, alias="Privileged")
    read_only_rootfs: bool | None = Field(default=None, alias="ReadOnlyRootfs")
    network_mode: str | None = Field(default=None, alias="NetMode")
    restart_policy: str | None = Field(default=None, alias="RestartPolicy")
    memory: int | None = Field(default=None, alias="Memory")
    cpu_shares: int | None = Field(default=None, alias="CPUShares")
    volumes: list[str] | None = Field(default=None, alias="Volumes")
    dns_servers: list[str] | None = Field(default=None, alias="DNSServers")
    cap_add: list[str] | None = Field(default=None, alias="CapAdd")
    cap_drop: list[str] | None = Field(default=None, alias="CapDrop")

    def config_section(self) -> dict[str, Any]:
        """Fields that belong under the record's `Config` key."""

        env = None
        if self.env is not None:
            env = [f"{key}={value}" for key, value in sorted(self.env.items())]
        section = {
            "Hostname": self.hostname,
            "User": self.user,
            "Env": env,
            "Cmd": self.command,
            "Entrypoint": self.entrypoint,
            "Image": self.image,
            "WorkingDir": self.work_dir,
            "Labels": self.labels,
            "Tty": self.tty,
            "StopSignal": self.stop_signal,
        }
        return {key: value for key, value in section.items() if value is not None}

    def host_config_section(self) -> dict[str, Any]:
        """Fields that belong under the record's `HostConfig` key."""

        restart = None
        if self.restart_policy:
            restart = {"Name": self.restart_policy, "MaximumRetryCount": 0}
        section = {
            "Binds": self.volumes,
            "NetworkMode": self.network_mode,
            "RestartPolicy": restart,
            "Privileged": self.privileged,
            "ReadonlyRootfs": self.read_only_rootfs,
            "Memory": self.memory,
            "CpuShares": self.cpu_shares,
            "Dns": self.dns_servers,
            "CapAdd": self.cap_add,
            "CapDrop": self.cap_drop,
        }
        return {key: value for key, value in section.items() if value is not None}


@dataclass
class InspectionOutcome:
    """Result of resolving and fetching a single identifier."""

    identifier: str
    record: InspectionRecord | None = None
    error: InspectError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Records kept by a batch policy plus the error that ends the batch."""

    records: list[InspectionRecord] = field(default_factory=list)
    error: InspectError | None = None
    outcomes: list[InspectionOutcome] = field(default_factory=list)

    @property
    def failed(self) -> bool:
        return self.error is not None
