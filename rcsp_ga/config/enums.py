# Indices / constants used across modules (keep ints for JIT friendliness)
import sys

SOURCE = 0              # the sink is always num_nodes - 1
PRIORITY_MAX = sys.maxsize  # rank of any node absent from the chromosome

FITNESS_INFEASIBLE = 0.0

# metrics row columns
M_GEN       = 0
M_BEST_FIT  = 1
M_MEAN_FIT  = 2
M_BEST_COST = 3
M_FEASIBLE  = 4
M_DIVERSITY = 5
