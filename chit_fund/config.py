"""Configuration management for chit-fund."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from chit_fund.exceptions import ConfigurationError
from chit_fund.models.fund.enums import ResidualPolicy


@dataclass
class LoanPolicyConfig:
    """Loan issuance policy.

    The 70/30 split is fixed and not configurable. ``min_term_months``
    and ``max_term_months`` bound what a manager may choose; the engine
    itself accepts any positive term.
    """

    rounding_unit: Decimal = Decimal("1")
    residual_policy: ResidualPolicy = ResidualPolicy.NONE
    min_term_months: int = 6
    max_term_months: int = 12
    currency: str = "Rs."

    def __post_init__(self) -> None:
        if self.rounding_unit <= 0:
            raise ConfigurationError(f"Rounding unit must be positive, got {self.rounding_unit}")
        if not 1 <= self.min_term_months <= self.max_term_months:
            raise ConfigurationError(
                f"Invalid term range {self.min_term_months}..{self.max_term_months}"
            )

    @property
    def term_options(self) -> list[int]:
        """Terms a manager may pick, in months."""
        return list(range(self.min_term_months, self.max_term_months + 1))


@dataclass
class KafkaConfig:
    """Kafka producer configuration."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Output configuration."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class FundConfig:
    """Main configuration for chit-fund."""

    policy: LoanPolicyConfig = field(default_factory=LoanPolicyConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    topic_prefix: str = "dev.fund"
    source: str = "chit-fund"
    seed: int | None = None
    log_level: str = "INFO"

    @property
    def events_topic(self) -> str:
        """Topic receiving loan lifecycle events."""
        return f"{self.topic_prefix}.loan-events"

    @classmethod
    def from_env(cls) -> "FundConfig":
        """Create config from environment variables."""
        import os

        try:
            policy = LoanPolicyConfig(
                rounding_unit=Decimal(os.getenv("CHIT_FUND_ROUNDING_UNIT", "1")),
                residual_policy=ResidualPolicy(
                    os.getenv("CHIT_FUND_RESIDUAL_POLICY", ResidualPolicy.NONE.value).upper()
                ),
                min_term_months=int(os.getenv("CHIT_FUND_MIN_TERM", "6")),
                max_term_months=int(os.getenv("CHIT_FUND_MAX_TERM", "12")),
                currency=os.getenv("CHIT_FUND_CURRENCY", "Rs."),
            )
            seed = int(os.getenv("SEED")) if os.getenv("SEED") else None
        except (ValueError, InvalidOperation) as e:
            raise ConfigurationError(f"Invalid chit-fund environment: {e}") from e

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            policy=policy,
            kafka=kafka,
            output=output,
            topic_prefix=os.getenv("TOPIC_PREFIX", "dev.fund"),
            seed=seed,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
