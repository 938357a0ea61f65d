"""RRT family primitives and the composed SamplingPlanner."""
