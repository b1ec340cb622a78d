"""Quick start example: register a 2D lookup table and query it by handle."""

import math

import numpy as np

from pymultilinear import InterpolationEngine

# Sample a smooth 2D response on a non-uniform grid (last dimension fastest)
altitude = np.array([0.0, 1000.0, 3000.0, 6000.0, 12000.0])
mach = np.array([0.0, 0.3, 0.6, 0.9])
thrust = np.array([[1.0 - a / 20000.0 - 0.2 * m ** 2 for m in mach] for a in altitude])
fuel_flow = 0.6 * thrust + 0.05

with InterpolationEngine(verbose=True) as engine:
    handle = engine.create_interpolator([altitude, mach], [thrust, fuel_flow])

    point = [2500.0, 0.45]
    exact = 1.0 - point[0] / 20000.0 - 0.2 * point[1] ** 2
    approx, flow = engine.interpolate(handle, point)
    print(f"Exact thrust:  {exact:.6f}")
    print(f"Approx thrust: {approx:.6f}")
    print(f"Error:         {abs(approx - exact):.2e}")
    print(f"Fuel flow:     {flow:.6f}")

    # Outside the table: clamp (closed range) or extrapolate (open range)
    outside = [15000.0, 0.45]
    clamped = engine.interpolate(handle, outside, closed_range=True)[0]
    extrapolated = engine.interpolate(handle, outside)[0]
    print(f"\nAt {outside}: clamped {clamped:.6f}, extrapolated {extrapolated:.6f}")
    print(f"Exact there:  {1.0 - outside[0] / 20000.0 - 0.2 * outside[1] ** 2:.6f}")
    assert math.isclose(engine.interpolate(handle, [12000.0, 0.45], True)[0],
                        engine.interpolate(handle, [12000.0, 0.45], False)[0])
