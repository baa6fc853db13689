"""
Run a single storm-surge simulation and print diagnostics.

Example:
    python scripts/simulate_surge.py --forcing ou --amplitude 0.5 --seed 3 --t-end 21600
"""

import argparse

import jax
import jax.numpy as jnp

from jax_surge.forcing import ForcingKind, make_forcing
from jax_surge.integrate import solve_with_history, RK4
from jax_surge.solvers import (
    GridParameters, SurgeWave1D, depth_profile, create_staggered_grid,
    initial_state_bump,
)


def forcing_params(args) -> dict:
    """Constructor arguments for the selected forcing kind."""
    kind = ForcingKind(args.forcing)
    if kind == ForcingKind.ZERO:
        return {}
    params = {"amplitude": args.amplitude}
    if kind == ForcingKind.PERIODIC:
        params["period"] = args.period
    elif kind in (ForcingKind.MULTI_FREQUENCY, ForcingKind.PIECEWISE):
        params["seed"] = args.seed
    elif kind in (ForcingKind.AUTOREGRESSIVE, ForcingKind.ORNSTEIN_UHLENBECK):
        params["seed"] = args.seed
        params["dt"] = args.forcing_dt
    return params


def main():
    parser = argparse.ArgumentParser(description="Simulate the 1D storm-surge model")
    parser.add_argument('--L', type=float, default=100e3, help='Domain length [m]')
    parser.add_argument('--nx', type=int, default=100, help='Number of height nodes')
    parser.add_argument('--d-min', type=float, default=5.0, help='Minimum depth [m]')
    parser.add_argument('--d-max', type=float, default=20.0, help='Maximum depth [m]')
    parser.add_argument('--d-edges', type=float, nargs=2, default=(20e3, 80e3),
                        help='Centres of the two depth transitions [m]')
    parser.add_argument('--d-widths', type=float, nargs=2, default=(5e3, 5e3),
                        help='Widths of the two depth transitions [m]')
    parser.add_argument('--C', type=float, default=50.0, help='Chezy friction coefficient')
    parser.add_argument('--rho', type=float, default=1025.0, help='Fluid density [kg/m^3]')
    parser.add_argument('--forcing', type=str, default='periodic',
                        choices=[k.value for k in ForcingKind], help='Wind forcing kind')
    parser.add_argument('--amplitude', type=float, default=1.0, help='Forcing amplitude')
    parser.add_argument('--period', type=float, default=8 * 3600.0, help='Forcing period [s]')
    parser.add_argument('--forcing-dt', type=float, default=60.0, help='Internal step of stochastic forcing [s]')
    parser.add_argument('--seed', type=int, default=0, help='Random seed')
    parser.add_argument('--h0', type=float, default=0.0, help='Initial bump height [m]')
    parser.add_argument('--t-end', type=float, default=12 * 3600.0, help='Simulation time [s]')
    parser.add_argument('--dt', type=float, default=10.0, help='Time step size [s]')
    parser.add_argument('--n-out', type=int, default=13, help='Number of output times')
    parser.add_argument('--x64', action='store_true', help='Use double precision')
    args = parser.parse_args()

    if args.x64:
        jax.config.update("jax_enable_x64", True)

    _, x_u, _ = create_staggered_grid(args.L, args.nx)
    D = depth_profile(x_u, args.d_min, args.d_max, tuple(args.d_edges), tuple(args.d_widths))
    params = GridParameters.create(L=args.L, nx=args.nx, D=D, C=args.C, rho=args.rho)

    tau = make_forcing(args.forcing, **forcing_params(args))
    rhs = SurgeWave1D(params, tau=tau)

    # CFL check for the fastest gravity wave
    c_max = float(jnp.sqrt(params.g * jnp.max(params.D)))
    cfl = c_max * args.dt / params.dx
    print(f"CFL number: {cfl:.3f}")
    if cfl > 1.0:
        print("Warning: CFL > 1, the explicit scheme is likely unstable")

    y0 = initial_state_bump(params, h0=args.h0)
    t_eval = jnp.linspace(0.0, args.t_end, args.n_out)
    t, y = solve_with_history(rhs, (0.0, args.t_end), y0, RK4(), args.dt, t_eval=t_eval, verbose=True)

    print("\n   t [h]    volume [m^2]   max h [m]   max |u| [m/s]")
    for i in range(len(t)):
        h_i, u_i = y.h[i], y.u[i]
        volume = float(jnp.sum(h_i) * params.dx)
        print(f"{float(t[i]) / 3600:8.2f} {volume:14.4e} {float(jnp.max(h_i)):11.4f} "
              f"{float(jnp.max(jnp.abs(u_i))):14.4f}")


if __name__ == "__main__":
    main()
