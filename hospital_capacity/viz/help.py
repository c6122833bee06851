"""Static help text shown in the dashboard overlay."""

HELP_TITLE = "Hospital Simulation Help"

HELP_MARKDOWN = """
#### How the simulation works
This simulation models the operation of a hospital over time, taking into account
bed capacity, staffing, and patient influx. Each second of wall time is one simulated hour.

#### Parameters
- **Total Beds:** the total number of beds in the hospital. This limits the number of patients that can be admitted.
- **Occupied Beds at Start:** the number of beds occupied when the simulation starts or is reset. These patients are never discharged.
- **Doctors:** the number of doctors available. This affects the hospital's ability to treat patients.
- **Nurses:** the number of nurses available. This also affects treatment capacity.
- **Patient Influx:** the average number of new patients arriving per hour.
- **Average Treatment Time:** the average number of days a patient stays in the hospital.

#### How to read the data
- **Hospital Statistics:** current occupied beds, waiting, treated and discharged patients.
- **Performance Metrics:** occupancy rate (share of beds in use) and staff-to-patient ratio
  (doctors plus nurses per admitted patient).
- **Recommendations:** suggestions based on current metrics, most urgent first.
- **Time Series Data:** how key counts change over time during the simulation.

#### Controls
- **Start/Pause:** begins or pauses the simulation. Parameters can only be changed while paused.
- **Reset:** returns all counters to their initial state.
- **Trigger Mass Casualty:** adds 50 to 99 patients to the waiting queue at once.

Experiment with different parameters to see how they affect the hospital's performance over time!
"""

__all__ = ["HELP_TITLE", "HELP_MARKDOWN"]
