"""Точная векторная алгебра над кортежами Fraction (3D)."""

from fractions import Fraction

Vec3 = tuple[Fraction, Fraction, Fraction]


def sub(u: Vec3, v: Vec3) -> Vec3:
    return (u[0] - v[0], u[1] - v[1], u[2] - v[2])


def add(u: Vec3, v: Vec3) -> Vec3:
    return (u[0] + v[0], u[1] + v[1], u[2] + v[2])


def scale(u: Vec3, k: Fraction) -> Vec3:
    return (u[0] * k, u[1] * k, u[2] * k)


def dot(u: Vec3, v: Vec3) -> Fraction:
    return u[0] * v[0] + u[1] * v[1] + u[2] * v[2]


def cross(u: Vec3, v: Vec3) -> Vec3:
    return (
        u[1] * v[2] - u[2] * v[1],
        u[2] * v[0] - u[0] * v[2],
        u[0] * v[1] - u[1] * v[0],
    )


def is_zero(u: Vec3) -> bool:
    return u[0] == 0 and u[1] == 0 and u[2] == 0
