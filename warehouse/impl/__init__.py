"""
Warehouse implementation modules.

Contains concrete implementations of warehouse interfaces:
- RobotPoolImpl: fleet lifecycle and exclusive allocation
- TaskSchedulerImpl: retrieval chains, routing and charging
"""

from .robot_pool_impl import RobotPoolImpl
from .task_scheduler_impl import TaskSchedulerImpl

__all__ = [
    'RobotPoolImpl',
    'TaskSchedulerImpl'
]
