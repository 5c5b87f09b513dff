"""Configuration for output layers.

Provides configuration dataclasses and the connect_output factory function
for choosing how a file abstract layer writes (staged or real).
"""

from dataclasses import dataclass
from typing import Literal


@dataclass
class StagedOutputConfig:
    """Configuration for staged output.

    Attributes:
        type: Always "staged".
        publish_dir: Directory the output is meant for. Not touched by
            writes; only ``flush()`` materializes files there.
        staging: Private storage for written bytes, "disk" (a temporary
            directory) or "memory".
    """

    type: Literal["staged"] = "staged"
    publish_dir: str = ""
    staging: Literal["disk", "memory"] = "disk"


@dataclass
class RealOutputConfig:
    """Configuration for output written straight to a real directory.

    Attributes:
        type: Always "real".
        output_dir: Directory every write lands in.
    """

    type: Literal["real"] = "real"
    output_dir: str = ""


# Type alias for all output configs
OutputConfig = StagedOutputConfig | RealOutputConfig


def connect_output(
    type: Literal["staged", "real"] = "staged",
    **kwargs,
) -> OutputConfig:
    """Configure output.

    Args:
        type: Output type.
            - "staged": Writes go to private storage; the publish
                        directory is only a deferred target.
                        Requires 'publish_dir'.
            - "real": Writes go directly to a real directory.
                      Requires 'output_dir'.
        **kwargs: Additional configuration for the output type.
            For type="staged":
                - publish_dir (str): Required.
                - staging (str): Optional. "disk" (default) or "memory".
            For type="real":
                - output_dir (str): Required.

    Returns:
        OutputConfig for the builder.

    Examples:
        >>> connect_output(type="staged", publish_dir="/out/site")
        StagedOutputConfig(type='staged', publish_dir='/out/site', staging='disk')

        >>> connect_output(type="real", output_dir="/out/site")
        RealOutputConfig(type='real', output_dir='/out/site')
    """
    if type == "staged":
        publish_dir = kwargs.pop("publish_dir", "")
        staging = kwargs.pop("staging", "disk")
        if kwargs:
            raise ValueError(
                f"Unexpected arguments for staged output: {list(kwargs.keys())}"
            )
        if not publish_dir:
            raise ValueError("Staged output requires 'publish_dir' parameter")
        if staging not in ("disk", "memory"):
            raise ValueError(f"Unsupported staging: {staging}. Use 'disk' or 'memory'.")
        return StagedOutputConfig(publish_dir=str(publish_dir), staging=staging)

    elif type == "real":
        output_dir = kwargs.pop("output_dir", "")
        if kwargs:
            raise ValueError(
                f"Unexpected arguments for real output: {list(kwargs.keys())}"
            )
        if not output_dir:
            raise ValueError("Real output requires 'output_dir' parameter")
        return RealOutputConfig(output_dir=str(output_dir))

    else:
        raise ValueError(
            f"Unsupported output type: {type}. Use 'staged' or 'real'."
        )
