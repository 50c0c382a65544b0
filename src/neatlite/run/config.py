import configparser
import os
from typing import Callable

from neatlite.activations import activations
from neatlite.errors      import ConfigurationError

class Config:

    @staticmethod
    def _check_activation(name):
        """
        Make sure 'name' identifies a known activation function.

        Parameters:
            name: name of the activation function, a key in the 'activations' registry

        Returns:
            the name itself
        """
        if name not in activations:
            raise ConfigurationError(f"Invalid activation function '{name}'; "
                                     f"choose one of {sorted(activations)}")
        return name

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a Config holding default values.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a default Config which can be adjusted by setting attributes.
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.population_size    = 20
            self.num_inputs         = 4
            self.num_outputs        = 6
            self.num_starting_genes = 5
            self.seed               = None

            self.compatibility_threshold = 3.0
            self.distance_excess_coeff   = 1.0
            self.distance_disjoint_coeff = 1.0
            self.distance_weight_coeff   = 1.0

            self.champion_min_species_size = 5

            self.activation      = 'sigmoid'
            self.eval_iterations = 10

            self.min_weight          = -5.0
            self.max_weight          =  5.0
            self.min_nudge           = -0.2
            self.max_nudge           =  0.2
            self.weight_replace_prob =  0.1

            self.gene_add_probability     = 0.05
            self.node_add_probability     = 0.03
            self.weight_nudge_probability = 0.8
            self.gene_add_attempts        = 5

            self.fitness_termination_check = False
            self.fitness_criterion         = 'max'
            self.fitness_threshold         = None
            self.max_number_generations    = 100
            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == bool:
                    return parser.getboolean(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [POPULATION_INIT]

        # The number of genomes in each generation.
        self.population_size = get_value('POPULATION_INIT', 'population_size', int)

        # The number of input nodes, through which the network receives inputs.
        self.num_inputs = get_value('POPULATION_INIT', 'num_inputs', int)

        # The number of output nodes, to which the network delivers outputs.
        self.num_outputs = get_value('POPULATION_INIT', 'num_outputs', int)

        # The number of input->output connections every genome starts with.
        # Cannot exceed num_inputs * num_outputs.
        self.num_starting_genes = get_value('POPULATION_INIT', 'num_starting_genes', int)

        # Seed for the random number generator. Use "None" to seed from OS entropy,
        # in which case runs are not reproducible.
        self.seed = get_value('POPULATION_INIT', 'seed', int, default=None)

        # [SPECIATION]

        # Genomes whose distance to a species representative is at most
        # this threshold are placed in that species.
        self.compatibility_threshold = get_value('SPECIATION', 'compatibility_threshold', float)

        # The coefficients (c1, c2, c3) for the excess gene count, the disjoint
        # gene count and the mean weight difference of matching genes.
        self.distance_excess_coeff   = get_value('SPECIATION', 'distance_excess_coeff',   float)
        self.distance_disjoint_coeff = get_value('SPECIATION', 'distance_disjoint_coeff', float)
        self.distance_weight_coeff   = get_value('SPECIATION', 'distance_weight_coeff',   float)

        # [REPRODUCTION]

        # Species with more members than this copy their champion unchanged
        # into the next generation.
        self.champion_min_species_size = get_value('REPRODUCTION', 'champion_min_species_size', int, default=5)

        # [NETWORK]

        # Squash function applied to the weighted input of every non-input node.
        self.activation = get_value('NETWORK', 'activation', str)

        # The number of relaxation sweeps performed when activating a network.
        # More sweeps let the signal travel along longer (or recurrent) paths.
        self.eval_iterations = get_value('NETWORK', 'eval_iterations', int)

        # [CONNECTION]

        # The range from which new (or replaced) connection weights are drawn uniformly.
        self.min_weight = get_value('CONNECTION', 'min_weight', float)
        self.max_weight = get_value('CONNECTION', 'max_weight', float)

        # The range from which the additive weight perturbations are drawn uniformly.
        self.min_nudge = get_value('CONNECTION', 'min_nudge', float)
        self.max_nudge = get_value('CONNECTION', 'max_nudge', float)

        # The probability that nudging replaces a weight with a brand new
        # value instead of perturbing it.
        self.weight_replace_prob = get_value('CONNECTION', 'weight_replace_prob', float)

        # [STRUCTURAL_MUTATIONS]

        # The probability that an offspring gets a new connection.
        self.gene_add_probability = get_value('STRUCTURAL_MUTATIONS', 'gene_add_probability', float)

        # The probability that an offspring gets a new node (splitting an enabled connection).
        self.node_add_probability = get_value('STRUCTURAL_MUTATIONS', 'node_add_probability', float)

        # The probability that the weights of an offspring are nudged.
        self.weight_nudge_probability = get_value('STRUCTURAL_MUTATIONS', 'weight_nudge_probability', float)

        # How many random node pairs are tried before giving up on adding a connection.
        self.gene_add_attempts = get_value('STRUCTURAL_MUTATIONS', 'gene_add_attempts', int, default=5)

        # [TERMINATION]

        # Whether to use the fitness of the most recent
        # generation as a criterion for stopping the run.
        self.fitness_termination_check = get_value('TERMINATION', 'fitness_termination_check', bool, default=False)

        # The function used to compute the termination criterion.
        # Allowed values:
        #   "mean" calculate the mean fitness across the entire population
        #   "max"  get the fitness of the fittest genome in the population
        self.fitness_criterion = get_value('TERMINATION', 'fitness_criterion', str, default='max')

        # The fitness value which when met or exceeded causes the run to end.
        self.fitness_threshold = get_value('TERMINATION', 'fitness_threshold', float, default=None)

        # The number of generations after which to stop the run.
        self.max_number_generations = get_value('TERMINATION', 'max_number_generations', int, default=100)

    @property
    def squash(self) -> Callable:
        """The activation function applied by non-input nodes."""
        return activations[self.activation]

    @property
    def max_starting_genes(self) -> int:
        """The number of distinct input->output connections."""
        return self.num_inputs * self.num_outputs

    def validate(self) -> None:
        """
        Check that the configuration values are consistent.

        Raises:
            ConfigurationError: describing the first problem found
        """
        if self.population_size < 1:
            raise ConfigurationError("population_size must be at least 1")
        if self.num_inputs < 1 or self.num_outputs < 1:
            raise ConfigurationError("networks need at least one input and one output node")
        if self.num_starting_genes < 0:
            raise ConfigurationError("num_starting_genes cannot be negative")
        if self.num_starting_genes > self.max_starting_genes:
            raise ConfigurationError(f"too many starting genes: {self.num_starting_genes} requested, "
                                     f"at most {self.max_starting_genes} input->output connections exist")
        if self.min_weight > self.max_weight:
            raise ConfigurationError("min_weight is larger than max_weight")
        if self.min_nudge > self.max_nudge:
            raise ConfigurationError("min_nudge is larger than max_nudge")
        if self.eval_iterations < 1:
            raise ConfigurationError("eval_iterations must be at least 1")
        if self.gene_add_attempts < 1:
            raise ConfigurationError("gene_add_attempts must be at least 1")
        for name in ('weight_replace_prob', 'gene_add_probability',
                     'node_add_probability', 'weight_nudge_probability'):
            if not 0.0 <= getattr(self, name) <= 1.0:
                raise ConfigurationError(f"{name} must be a probability in [0, 1]")
        if self.fitness_termination_check:
            if self.fitness_criterion not in ('max', 'mean'):
                raise ConfigurationError("fitness_criterion must be 'max' or 'mean'")
            if self.fitness_threshold is None:
                raise ConfigurationError("fitness_threshold is required when fitness_termination_check is on")

    def __setattr__(self, name, value):
        """
        Override 'setattr' so that an unknown activation name
        is rejected as soon as it is assigned.
        """
        if name == 'activation':
            value = self._check_activation(value)
        super().__setattr__(name, value)
