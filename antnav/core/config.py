import math
import numbers

DEFAULT_CONFIG = {
    'evaporation_rate': 0.1,   # Fraction lost per pass when not reinforced
    'pheromone_deposit': 0.5,  # Added to edges ending at the navigated node
    'min_pheromone': 0.1,
    'max_pheromone': 1.0,
    'ant_speed': 2,            # Reserved, movement is one hop per tick
    'num_ants': 5
}


class ACOConfig:
    """Immutable tuning constants for one simulation."""

    __slots__ = ('_config',)

    def __init__(self, config_dict=None):
        config = DEFAULT_CONFIG.copy()
        if config_dict:
            unknown = set(config_dict) - set(DEFAULT_CONFIG)
            if unknown:
                raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
            config.update(config_dict)
        self._validate(config)
        object.__setattr__(self, '_config', config)

    @staticmethod
    def _validate(config):
        for key in ('evaporation_rate', 'pheromone_deposit', 'min_pheromone', 'max_pheromone', 'ant_speed'):
            value = config[key]
            if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
                raise ValueError(f"{key} must be a finite number, got {value!r}")
        if not 0.0 <= config['evaporation_rate'] <= 1.0:
            raise ValueError(f"evaporation_rate must be in [0, 1], got {config['evaporation_rate']}")
        if config['pheromone_deposit'] < 0:
            raise ValueError(f"pheromone_deposit must be non-negative, got {config['pheromone_deposit']}")
        if config['min_pheromone'] < 0:
            raise ValueError(f"min_pheromone must be non-negative, got {config['min_pheromone']}")
        if config['min_pheromone'] > config['max_pheromone']:
            raise ValueError(
                f"min_pheromone ({config['min_pheromone']}) exceeds max_pheromone ({config['max_pheromone']})"
            )
        if config['ant_speed'] < 0:
            raise ValueError(f"ant_speed must be non-negative, got {config['ant_speed']}")
        num_ants = config['num_ants']
        if isinstance(num_ants, bool) or not isinstance(num_ants, int) or num_ants < 0:
            raise ValueError(f"num_ants must be a non-negative integer, got {num_ants!r}")

    def __setattr__(self, name, value):
        raise AttributeError("ACOConfig is immutable; use replace() to derive a new one")

    def __delattr__(self, name):
        raise AttributeError("ACOConfig is immutable")

    @property
    def evaporation_rate(self):
        return self._config['evaporation_rate']

    @property
    def pheromone_deposit(self):
        return self._config['pheromone_deposit']

    @property
    def min_pheromone(self):
        return self._config['min_pheromone']

    @property
    def max_pheromone(self):
        return self._config['max_pheromone']

    @property
    def ant_speed(self):
        return self._config['ant_speed']

    @property
    def num_ants(self):
        return self._config['num_ants']

    def get(self, key):
        """Get configuration value."""
        return self._config.get(key)

    def to_dict(self):
        """Convert to dictionary."""
        return self._config.copy()

    def replace(self, **overrides):
        """Return a new config with the given values overridden."""
        config = self._config.copy()
        config.update(overrides)
        return ACOConfig(config)

    def clamp(self, value):
        """Clamp a pheromone strength into [min_pheromone, max_pheromone]."""
        return min(max(value, self.min_pheromone), self.max_pheromone)

    def __eq__(self, other):
        if not isinstance(other, ACOConfig):
            return NotImplemented
        return self._config == other._config

    def __hash__(self):
        return hash(tuple(sorted(self._config.items())))

    def __repr__(self):
        items = ', '.join(f"{k}={v!r}" for k, v in self._config.items())
        return f"ACOConfig({items})"
