"""Pytest configuration for raytracer tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts. 64-bit default
    floats keep kernel results comparable with the pure-Python renderer.
    """
    ti.init(arch=ti.cpu, default_fp=ti.f64, random_seed=42)
    yield


@pytest.fixture
def clear_kernel_scene():
    """Clear the kernel-side scene before and after a test."""
    # Import here so the integrator fields are created after ti.init()
    from phongtracer.core.integrator import clear_scene

    clear_scene()
    yield
    clear_scene()


@pytest.fixture
def default_world():
    """The reference two-sphere world with a single white light."""
    from phongtracer.scene.world import default_world

    return default_world()
