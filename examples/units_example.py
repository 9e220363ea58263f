#!/usr/bin/env python3

# Examples of units.
# Written by: Eric J. Whitney  Last updated: 24 November 2019

from pyunitex.units import convert, simplify, factor, equivalent


# ----------------------------------------------------------------------------

def main():
    wing_span, chord = 10, 1  # m
    wing_area = wing_span * chord  # m^2
    print(f"Wing area = {wing_area} m^2 "
          f"[{convert(wing_area, 'm^2', 'ft^2'):.5g} ft^2]")
    air_density = 0.002378  # slug/ft^3
    print(f"Air density = {air_density:5G} slug ft^-3 "
          f"[{convert(air_density, 'slug ft^-3', 'kg m^-3'):5G} kg m^-3]")
    cl_max = 1.35
    takeoff_mass = 300  # kg
    print(f"Takeoff mass = {takeoff_mass:.5G} kg "
          f"[{convert(takeoff_mass, 'kg', 'lbm'):.5G} lbm]")
    wing_loading = takeoff_mass * 9.80665 / wing_area  # kg m s^-2 m^-2
    print(f"Wing loading = {wing_loading:.5G} "
          f"{simplify('kg m s^-2 m^-2')[0]} "
          f"[{convert(wing_loading, 'Pa', 'psf'):.5G} psf]")

    stall_speed = (2 * wing_loading / convert(air_density, 'slug ft^-3',
                                               'kg m^-3') / cl_max) ** 0.5
    print(f"Stall speed = {stall_speed:.5G} m s^-1 "
          f"[{convert(stall_speed, 'm s^-1', 'fps'):.5G} fps] "
          f"[{convert(stall_speed, 'm s^-1', 'kt'):.5G} kt]")

    print(f"Factor from psi to kPa = {factor('psi', 'kPa'):.5f}")
    print(f"Boiling point = {convert(100, '°C', '°F'):.1f} °F")
    print(f"1 s equivalent to 1 min? {equivalent(1, 's', 'min')}")

    mileage = 40  # rod / US_gal
    print(f"Grampa Simpson's car gets {mileage} rod US_gal^-1, and that's "
          f"the way he likes it!")
    print(f"(In more conventional units this is equal to "
          f"{convert(mileage, 'rod US_gal^-1', 'mi US_gal^-1'):.5f} "
          f"mi US_gal^-1 or "
          f"{100 / convert(mileage, 'rod US_gal^-1', 'km L^-1'):.1f} "
          f"L / 100 km)")

    print(f"Signal level 20 dB(mW) = "
          f"{convert(20.0, 'dlog(re 1 mW)', 'W'):.3f} W")


# -----------------------------------------------------------------------------

if __name__ == "__main__":
    main()
