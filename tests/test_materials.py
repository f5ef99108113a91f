"""Unit tests for the material scattering models.

Tests cover:
- Diffuse: always scatters, attenuation = albedo, degenerate direction fallback
- Metal: perfect mirror reflection, fuzzy reflection, absorption below surface
- Dielectric: refraction, total internal reflection, Schlick reflectance
- Parameter validation and material tags
"""

import math

import numpy as np
import pytest

from spheretrace.core.ray import Intersection, Ray
from spheretrace.core.vector import Vector, reflect
from spheretrace.materials import (
    Dielectric,
    Diffuse,
    MaterialType,
    Metal,
    schlick_reflectance,
)
from spheretrace.materials import diffuse as diffuse_module
from spheretrace.materials import metal as metal_module


def _close(a, b, tol=1e-5):
    return all(abs(x - y) < tol for x, y in zip(a, b))


def _hit(material, normal=Vector(0.0, 1.0, 0.0), front_face=True):
    """Intersection at the origin with the given normal."""
    return Intersection(
        point=Vector(0.0, 0.0, 0.0),
        normal=normal,
        t=1.0,
        front_face=front_face,
        material=material,
    )


class TestDiffuse:
    """Tests for the diffuse material."""

    def test_always_scatters_with_albedo(self, rng):
        albedo = Vector(0.8, 0.3, 0.3)
        material = Diffuse(albedo)
        ray_in = Ray(Vector(0.0, 1.0, 0.0), Vector(0.3, -1.0, 0.2))

        for normal in (Vector(0.0, 1.0, 0.0), Vector(0.0, 0.0, -1.0), Vector(1.0, 0.0, 0.0)):
            hit = _hit(material, normal)
            for _ in range(50):
                result = material.scatter(ray_in, hit, rng)
                assert result.scattered is True
                assert result.attenuation == albedo
                assert result.ray.origin == hit.point

    def test_scatters_into_normal_hemisphere(self, rng):
        material = Diffuse(Vector(0.5, 0.5, 0.5))
        hit = _hit(material)
        ray_in = Ray(Vector(0.0, 1.0, 0.0), Vector(0.0, -1.0, 0.0))

        for _ in range(100):
            result = material.scatter(ray_in, hit, rng)
            assert result.ray.direction.dot(hit.normal) >= -1e-6

    def test_degenerate_direction_falls_back_to_normal(self, rng, monkeypatch):
        """A random vector that cancels the normal yields the normal itself."""
        material = Diffuse(Vector(0.5, 0.5, 0.5))
        hit = _hit(material)
        monkeypatch.setattr(diffuse_module, "random_unit_vector", lambda _rng: -hit.normal)

        result = material.scatter(Ray(Vector(0.0, 1.0, 0.0), Vector(0.0, -1.0, 0.0)), hit, rng)

        assert result.ray.direction == hit.normal

    def test_rejects_albedo_outside_unit_range(self):
        with pytest.raises(ValueError):
            Diffuse(Vector(1.2, 0.5, 0.5))
        with pytest.raises(ValueError):
            Diffuse(Vector(0.5, -0.1, 0.5))

    def test_material_type(self):
        assert Diffuse(Vector(0.5, 0.5, 0.5)).material_type == MaterialType.DIFFUSE


class TestMetal:
    """Tests for the metal material."""

    def test_mirror_normal_incidence(self, rng):
        """roughness=0 at normal incidence reproduces reflect() exactly."""
        material = Metal(Vector(0.9, 0.9, 0.9), roughness=0.0)
        hit = _hit(material)
        incoming = Vector(0.0, -1.0, 0.0)

        result = material.scatter(Ray(Vector(0.0, 1.0, 0.0), incoming), hit, rng)

        assert result.scattered is True
        assert result.ray.direction == reflect(incoming, hit.normal)
        assert result.ray.direction == Vector(0.0, 1.0, 0.0)

    def test_mirror_normalizes_incoming_direction(self, rng):
        material = Metal(Vector(0.9, 0.9, 0.9), roughness=0.0)
        hit = _hit(material)

        result = material.scatter(Ray(Vector(0.0, 1.0, 0.0), Vector(0.0, -3.0, 0.0)), hit, rng)

        assert result.ray.direction == Vector(0.0, 1.0, 0.0)

    def test_mirror_45_degrees(self, rng):
        material = Metal(Vector(1.0, 1.0, 1.0), roughness=0.0)
        hit = _hit(material)

        result = material.scatter(Ray(Vector(-1.0, 1.0, 0.0), Vector(1.0, -1.0, 0.0)), hit, rng)

        inv_sqrt2 = 1.0 / math.sqrt(2.0)
        assert result.scattered is True
        assert _close(result.ray.direction, (inv_sqrt2, inv_sqrt2, 0.0))

    def test_attenuation_is_albedo(self, rng):
        albedo = Vector(0.8, 0.6, 0.2)
        material = Metal(albedo, roughness=0.3)
        hit = _hit(material)
        result = material.scatter(Ray(Vector(0.0, 1.0, 0.0), Vector(0.2, -1.0, 0.0)), hit, rng)
        assert result.attenuation == albedo

    def test_fuzzy_reflection_stays_near_mirror(self, rng):
        material = Metal(Vector(0.8, 0.8, 0.8), roughness=0.2)
        hit = _hit(material)
        incoming = Vector(0.0, -1.0, 0.0)

        for _ in range(50):
            result = material.scatter(Ray(Vector(0.0, 1.0, 0.0), incoming), hit, rng)
            offset = result.ray.direction - Vector(0.0, 1.0, 0.0)
            assert offset.length() < 0.2 + 1e-6
            assert result.scattered is True

    def test_absorbed_when_scattered_below_surface(self, rng, monkeypatch):
        """A perturbation that points into the surface extinguishes the ray."""
        albedo = Vector(0.8, 0.8, 0.8)
        material = Metal(albedo, roughness=1.0)
        hit = _hit(material)
        monkeypatch.setattr(
            metal_module, "random_in_unit_sphere", lambda _rng: Vector(0.0, -0.9, 0.0)
        )
        grazing = Vector(1.0, -0.1, 0.0)

        result = material.scatter(Ray(Vector(-1.0, 0.1, 0.0), grazing), hit, rng)

        assert result.scattered is False
        assert result.attenuation == albedo

    def test_rejects_invalid_roughness(self):
        with pytest.raises(ValueError):
            Metal(Vector(0.5, 0.5, 0.5), roughness=1.5)
        with pytest.raises(ValueError):
            Metal(Vector(0.5, 0.5, 0.5), roughness=-0.1)

    def test_material_type(self):
        assert Metal(Vector(0.5, 0.5, 0.5)).material_type == MaterialType.METAL


class TestDielectric:
    """Tests for the dielectric material."""

    def test_refracts_straight_through_at_normal_incidence(self, fixed_random):
        """Above the Schlick reflectance (0.04 for glass) the ray refracts."""
        material = Dielectric(1.5)
        hit = _hit(material)

        result = material.scatter(
            Ray(Vector(0.0, 1.0, 0.0), Vector(0.0, -1.0, 0.0)), hit, fixed_random(0.5)
        )

        assert result.scattered is True
        assert _close(result.ray.direction, (0.0, -1.0, 0.0))

    def test_reflects_below_schlick_reflectance(self, fixed_random):
        material = Dielectric(1.5)
        hit = _hit(material)

        result = material.scatter(
            Ray(Vector(0.0, 1.0, 0.0), Vector(0.0, -1.0, 0.0)), hit, fixed_random(0.01)
        )

        assert result.scattered is True
        assert _close(result.ray.direction, (0.0, 1.0, 0.0))

    def test_refraction_bends_toward_normal_entering_glass(self, fixed_random):
        material = Dielectric(1.5)
        hit = _hit(material)
        inv_sqrt2 = 1.0 / math.sqrt(2.0)

        result = material.scatter(
            Ray(Vector(-1.0, 1.0, 0.0), Vector(inv_sqrt2, -inv_sqrt2, 0.0)), hit, fixed_random(0.99)
        )

        assert abs(result.ray.direction.x - inv_sqrt2 / 1.5) < 1e-5
        assert result.ray.direction.y < 0.0

    def test_total_internal_reflection(self, fixed_random):
        """Leaving glass at 60 degrees: 1.5 * sin(60) > 1 forces reflection."""
        material = Dielectric(1.5)
        hit = _hit(material, front_face=False)
        incoming = Vector(math.sin(math.radians(60.0)), -math.cos(math.radians(60.0)), 0.0)

        # Even a draw that would always refract must reflect
        result = material.scatter(Ray(Vector(0.0, 1.0, 0.0), incoming), hit, fixed_random(0.999))

        assert result.scattered is True
        assert _close(result.ray.direction, reflect(incoming, hit.normal))

    def test_attenuation_is_white(self, rng):
        material = Dielectric(1.5)
        hit = _hit(material)
        for _ in range(20):
            result = material.scatter(Ray(Vector(0.0, 1.0, 0.0), Vector(0.3, -1.0, 0.0)), hit, rng)
            assert result.scattered is True
            assert result.attenuation == Vector(1.0, 1.0, 1.0)

    def test_rejects_invalid_refractive_index(self):
        with pytest.raises(ValueError):
            Dielectric(0.0)
        with pytest.raises(ValueError):
            Dielectric(-1.5)

    def test_accepts_index_below_one(self):
        """An index below 1 models a less dense medium such as an air bubble."""
        assert Dielectric(1.0 / 1.5).refractive_index == 1.0 / 1.5

    def test_material_type(self):
        assert Dielectric(1.5).material_type == MaterialType.DIELECTRIC


class TestSchlickReflectance:
    """Tests for schlick_reflectance()."""

    def test_normal_incidence_glass(self):
        assert abs(schlick_reflectance(1.0, 1.5) - 0.04) < 1e-6

    def test_symmetric_in_index_and_ratio(self):
        assert abs(schlick_reflectance(0.6, 1.5) - schlick_reflectance(0.6, 1.0 / 1.5)) < 1e-6

    def test_grazing_reflects_fully(self):
        assert abs(schlick_reflectance(0.0, 1.5) - 1.0) < 1e-6

    def test_increases_toward_grazing(self):
        values = [schlick_reflectance(c, 1.5) for c in np.linspace(1.0, 0.0, 11)]
        assert all(a <= b for a, b in zip(values, values[1:]))
