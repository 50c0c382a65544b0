"""
NEAT Trial Module

This module defines the abstract base class for NEAT trials.

A trial represents one independent run of the NEAT algorithm, evolving a
population through generations until a solution is found or the maximum
number of generations is reached. It plays the role of the driver: it
assigns a fitness to every genome before each reproduction step.
"""

import logging
from abc        import ABC, abstractmethod
from statistics import mean

from neatlite.genotype        import Genome
from neatlite.pool.population import Population
from neatlite.pool.ranking    import fitness_report
from neatlite.run.config      import Config

logger = logging.getLogger(__name__)

class Trial(ABC):
    """
    Abstract base class for implementing a NEAT trial.

    Subclasses must implement:
    - _evaluate_fitness(genome): Evaluate fitness for a single genome

    Subclasses can override:
    - _reset():           Reset trial-specific state (call super()._reset())
    - _report_progress(): Report progress after each generation (default: log it)
    - _final_report():    Report final results (default: log it)
    - _terminate():       Custom termination logic (default: max generations + fitness threshold)

    Public Attributes:
        population: The population being evolved (None before 'run' is called)
        failed:     Whether the trial ended without reaching the fitness threshold

    Public Methods:
        run(): Execute a complete NEAT trial
    """

    def __init__(self, config: Config, seed: int | None = None, suppress_output: bool = False):
        """
        Initialize the trial.

        Parameters:
            config:          Configuration parameters
            seed:            Seed for the population's random number generator
                             (overrides 'config.seed')
            suppress_output: If True, suppress progress and final reports
        """
        self._config            : Config = config
        self._seed              : int | None = seed
        self._generation_counter: int = 0
        self._suppress_output   : bool = suppress_output
        self.population         : Population | None = None
        self.failed             : bool = True

    def run(self) -> Population:
        """
        Run the trial.

        Resets the trial state and runs the evolutionary
        algorithm until the terminate condition is met.

        Returns:
            the evolved population
        """
        # Reset the trial state before starting a new run
        self._reset()

        # Create the initial population
        self.population = Population(self._config, seed=self._seed)

        # Evaluate the fitness of the initial population
        self._evaluate_fitness_all()

        if not self._suppress_output:
            self._report_progress()

        # Evolution loop
        while not self._terminate():
            self._generation_counter += 1

            # Breed the next generation from the current one
            self.population.reproduce()

            # Evaluate the fitness of each genome in the new generation
            self._evaluate_fitness_all()

            if not self._suppress_output:
                self._report_progress()

        if not self._suppress_output:
            self._final_report()

        return self.population

    def _reset(self):
        """
        Reset the trial state before starting a new run.
        """
        self._generation_counter = 0
        self.population = None
        self.failed = True

    @abstractmethod
    def _evaluate_fitness(self, genome: Genome) -> float:
        """
        Evaluate and return the fitness of a genome.

        This method should test the genome's neural network on the problem
        domain (see 'Genome.activate') and compute a fitness score. Higher
        fitness values mean more offspring.

        IMPORTANT: The fitness must be a positive number (or zero).

        Parameters:
            genome: The genome to evaluate

        Returns:
            float: Fitness score for the genome
        """
        pass

    def _evaluate_fitness_all(self):
        """
        Evaluate and store the fitness of every genome in the population.
        """
        for genome in self.population.genomes:
            genome.fitness = self._evaluate_fitness(genome)

    def _report_progress(self):
        """
        Log trial progress after each generation: best fitness and species sizes.

        The population is speciated here for diagnostic purposes; 'reproduce'
        speciates again on its own.
        """
        self.population.speciate()
        best = self.population.get_fittest_genome()
        logger.info("GEN %d | best fitness %.4g | species %s",
                    self._generation_counter, best.fitness,
                    " ".join(str(size) for size in self.population.species_sizes()))
        logger.debug("%s", fitness_report(self.population.genomes))

    def _final_report(self):
        best = self.population.get_fittest_genome()
        logger.info("Trial %s after %d generations, best fitness %.4g",
                    "failed" if self.failed else "succeeded", self._generation_counter, best.fitness)
        logger.info("Best genome:\n%s", best)

    def _terminate(self) -> bool:
        """
        Determine whether the trial should terminate.

        This default implementation stops the trial after a maximum number
        of generations and (optionally) also stops it if a given measure of
        population fitness has reached a given threshold.

        Returns:
            bool: True if the trial should stop, False otherwise
        """
        # Has this trial run for too long?
        terminate = self._generation_counter >= self._config.max_number_generations

        # Check whether the fitness has reached a target threshold
        if self._config.fitness_termination_check:
            genome_fitness = [genome.fitness for genome in self.population.genomes]

            if self._config.fitness_criterion == "max":
                overall_fitness = max(genome_fitness)
            elif self._config.fitness_criterion == "mean":
                overall_fitness = mean(genome_fitness)
            else:
                raise RuntimeError("bad 'fitness_criterion' in configuration file")

            # Compare a measure of population fitness (max, mean, ...) against a threshold
            success   = overall_fitness >= self._config.fitness_threshold
            terminate = terminate or success

            if terminate:
                self.failed = not success

        return terminate
