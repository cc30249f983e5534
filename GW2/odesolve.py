''' Copyright (c) 2020 by RESPEC, INC.
License: LGPL2
Adaptive step integration of a small system of ODEs over one time step
'''

import numpy as np
from scipy.integrate import solve_ivp


class ODESolverError(RuntimeError):
    ''' the integrator failed to reach the end of the step '''


def integrate(x, t0, t1, tol, dtmax, derivs, args=()):
    ''' integrates dx/dt = derivs(t, x, *args) from t0 to t1
    CALL: integrate(x, t0, t1, tol, dtmax, derivs, args)
       x is the starting state vector
       tol is both the relative and absolute error tolerance
       dtmax is the largest internal step allowed
    returns the state vector at t1 '''
    x = np.asarray(x, dtype=float)
    if t1 <= t0:
        return x

    def checked(t, y, *args):
        dydt = derivs(t, y, *args)
        if not np.all(np.isfinite(dydt)):
            raise ODESolverError(f'non-finite derivative {dydt} at t={t}, x={y}')
        return dydt

    sol = solve_ivp(checked, (t0, t1), x, method='RK45', rtol=tol, atol=tol,
                    max_step=dtmax, args=args)
    if not sol.success:
        raise ODESolverError(f'ODE integration failed between t={t0} and t={t1}: {sol.message}')
    return sol.y[:, -1]
