"""Genetic algorithm for visit sequencing.

Candidate routes are permutations of indices into a single immutable visit
table. Fitness is the open-tour distance ``start -> v1 -> ... -> vn`` read from
a precomputed haversine matrix where index 0 is the start location and visit
``i`` lives at index ``i + 1``. Lower fitness is better.

Every helper takes its inputs and returns new values; populations are never
mutated in place. Randomness comes from an injected ``numpy.random.Generator``
so runs are reproducible for a fixed seed.
"""

from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from ...config import settings
from ...models.domain import StartLocation, Visit
from ..geospatial import distance_matrix
from .metrics import build_route
from .models import OptimizedRoute

logger = logging.getLogger(__name__)

Permutation = tuple[int, ...]
RandomSource = Union[np.random.Generator, int, None]


@dataclass(slots=True, frozen=True)
class GeneticParameters:
    population_size: int = settings.population_size
    generations: int = settings.generations
    elite_fraction: float = 0.1
    tournament_size: int = 3
    mutation_rate: float = 0.1


def resolve_rng(rng: RandomSource) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def initial_population(size: int, gene_count: int, rng: np.random.Generator) -> list[Permutation]:
    return [tuple(int(gene) for gene in rng.permutation(gene_count)) for _ in range(size)]


def route_fitness(permutation: Permutation, matrix: np.ndarray) -> float:
    if not permutation:
        return 0.0
    path = np.concatenate(([0], np.asarray(permutation, dtype=int) + 1))
    return float(matrix[path[:-1], path[1:]].sum())


def tournament_select(
    population: Sequence[Permutation],
    fitness: Sequence[float],
    rng: np.random.Generator,
    tournament_size: int = 3,
) -> Permutation:
    """Sample ``tournament_size`` members with replacement and return the fittest."""

    contenders = rng.integers(0, len(population), size=tournament_size)
    winner = min(contenders, key=lambda index: fitness[index])
    return population[winner]


def crossover(parent1: Permutation, parent2: Permutation, rng: np.random.Generator) -> Permutation:
    """Order-preserving segment crossover.

    The child keeps ``parent1[start_cut:end_cut + 1]`` in place and fills the
    remaining positions with ``parent2``'s genes in order, skipping genes
    already placed.
    """

    size = len(parent1)
    if size == 0:
        return ()
    start_cut, end_cut = sorted(int(cut) for cut in rng.integers(0, size, size=2))

    child: list[Optional[int]] = [None] * size
    child[start_cut : end_cut + 1] = parent1[start_cut : end_cut + 1]
    placed = set(parent1[start_cut : end_cut + 1])
    remaining = iter(gene for gene in parent2 if gene not in placed)
    for position in range(size):
        if child[position] is None:
            child[position] = next(remaining)
    return tuple(child)


def mutate(permutation: Permutation, rng: np.random.Generator, mutation_rate: float = 0.1) -> Permutation:
    """Swap each position with probability ``mutation_rate`` with a random other position."""

    genes = list(permutation)
    size = len(genes)
    if size < 2:
        return tuple(genes)
    for position in range(size):
        if rng.random() < mutation_rate:
            other = int(rng.integers(0, size - 1))
            if other >= position:
                other += 1
            genes[position], genes[other] = genes[other], genes[position]
    return tuple(genes)


def evolve_population(
    population: Sequence[Permutation],
    fitness: Sequence[float],
    rng: np.random.Generator,
    params: GeneticParameters,
) -> list[Permutation]:
    elite_count = math.floor(len(population) * params.elite_fraction)
    ranking = np.argsort(np.asarray(fitness), kind="stable")
    next_generation = [population[index] for index in ranking[:elite_count]]

    while len(next_generation) < len(population):
        parent1 = tournament_select(population, fitness, rng, params.tournament_size)
        parent2 = tournament_select(population, fitness, rng, params.tournament_size)
        child = crossover(parent1, parent2, rng)
        next_generation.append(mutate(child, rng, params.mutation_rate))
    return next_generation


def genetic_optimize(
    visits: Sequence[Visit],
    start: StartLocation,
    population_size: int = settings.population_size,
    generations: int = settings.generations,
    *,
    rng: RandomSource = None,
    time_limit_seconds: Optional[float] = None,
    params: Optional[GeneticParameters] = None,
) -> OptimizedRoute:
    """Search for a short visiting order with a generational genetic algorithm.

    The loop runs for exactly ``generations`` iterations unless
    ``time_limit_seconds`` elapses, which is only checked between generations.
    Savings are computed against the order in which ``visits`` were supplied.

    Degenerate inputs (fewer than two visits, ``population_size <= 0`` or
    ``generations <= 0``) skip the loop and return the supplied order.
    """

    visits = list(visits)
    base = params or GeneticParameters()
    params = GeneticParameters(
        population_size=population_size,
        generations=generations,
        elite_fraction=base.elite_fraction,
        tournament_size=base.tournament_size,
        mutation_rate=base.mutation_rate,
    )
    metadata = {
        "algorithm": "genetic",
        "population_size": population_size,
        "generations_requested": generations,
    }

    if not visits:
        return OptimizedRoute(metadata={**metadata, "generations_run": 0, "fitness_history": []})
    if len(visits) < 2 or population_size <= 0 or generations <= 0:
        logger.info(
            f"Skipping evolutionary loop (visits={len(visits)}, population_size={population_size}, "
            f"generations={generations}); keeping supplied order"
        )
        return build_route(
            visits,
            start,
            baseline=visits,
            metadata={**metadata, "generations_run": 0, "fitness_history": []},
        )

    generator = resolve_rng(rng)
    matrix = distance_matrix([start.point, *(visit.point for visit in visits)])
    population = initial_population(population_size, len(visits), generator)

    best_permutation: Permutation = population[0]
    best_fitness = math.inf
    history: list[float] = []
    deadline = time.monotonic() + time_limit_seconds if time_limit_seconds else None
    stopped_early = False

    for generation in range(generations):
        fitness = [route_fitness(permutation, matrix) for permutation in population]
        generation_best = int(np.argmin(fitness))
        if fitness[generation_best] < best_fitness:
            best_fitness = fitness[generation_best]
            best_permutation = population[generation_best]
        history.append(best_fitness)

        population = evolve_population(population, fitness, generator, params)

        if deadline is not None and generation + 1 < generations and time.monotonic() >= deadline:
            stopped_early = True
            logger.info(f"Genetic optimizer time limit reached after {generation + 1}/{generations} generations")
            break

    logger.debug(f"Genetic optimizer best fitness {best_fitness:.3f} km after {len(history)} generations")
    ordered = [visits[index] for index in best_permutation]
    return build_route(
        ordered,
        start,
        baseline=visits,
        metadata={
            **metadata,
            "generations_run": len(history),
            "fitness_history": history,
            "best_fitness": best_fitness,
            "stopped_early": stopped_early,
        },
    )
