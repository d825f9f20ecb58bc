from unittest import TestCase

from datetime import datetime, timedelta

import numpy as np

import pandas as pd

from spindle import rotations as rot


class TestQuaternionNorm(TestCase):

    def test_quaternion_norm(self):

        self.assertAlmostEqual(rot.quaternion_norm([1, 2, 3, 4]), np.sqrt(30))
        self.assertEqual(rot.quaternion_norm_squared([1, 2, 3, 4]), 30)

        np.testing.assert_array_almost_equal(rot.quaternion_norm([[1, 0], [2, 0], [3, 0], [4, 2]]), [np.sqrt(30), 2])
        np.testing.assert_array_equal(rot.quaternion_norm_squared([[1, 0], [2, 0], [3, 0], [4, 2]]), [30, 4])

    def test_bad_shape(self):

        with self.assertRaises(ValueError):
            rot.quaternion_norm([1, 2, 3])

        with self.assertRaises(ValueError):
            rot.quaternion_norm(3)


class TestQuaternionNormalize(TestCase):

    def test_quaternion_normalize(self):

        qn = rot.quaternion_normalize([1, 2, 3, 4])

        np.testing.assert_array_almost_equal(qn, np.array([1, 2, 3, 4]) / np.sqrt(30))

        # the sign of the scalar component is kept
        qn = rot.quaternion_normalize([0, 0, 0, -2])

        np.testing.assert_array_equal(qn, [0, 0, 0, -1])

        qn = rot.quaternion_normalize([[1, 0], [2, 0], [3, 3], [4, 4]])

        np.testing.assert_array_almost_equal(qn.T, [np.array([1, 2, 3, 4]) / np.sqrt(30), [0, 0, 0.6, 0.8]])

    def test_does_not_modify_input(self):

        q = np.array([1., 2., 3., 4.])

        rot.quaternion_normalize(q)

        np.testing.assert_array_equal(q, [1, 2, 3, 4])

    def test_zero(self):

        with self.assertRaises(rot.ZeroNormError) as context:
            rot.quaternion_normalize([0, 0, 0, 0])

        self.assertIn('normalize zero quaternion', str(context.exception))

        # any zero column fails the whole call
        with self.assertRaises(rot.ZeroNormError):
            rot.quaternion_normalize([[1, 0], [0, 0], [0, 0], [0, 0]])

        # degenerate input is still a value error
        with self.assertRaises(ValueError):
            rot.quaternion_normalize([0, 0, 0, 1e-20])


class TestQuaternionConjugate(TestCase):

    def test_quaternion_conjugate(self):

        q = np.array([1., 2., 3., 4.])

        np.testing.assert_array_equal(rot.quaternion_conjugate(q), [-1, -2, -3, 4])
        np.testing.assert_array_equal(q, [1, 2, 3, 4])

        qc = rot.quaternion_conjugate([[1, 2], [2, 3], [3, 4], [4, 5]])

        np.testing.assert_array_equal(qc.T, [[-1, -2, -3, 4], [-2, -3, -4, 5]])


class TestQuaternionInverse(TestCase):

    def test_quaternion_inverse(self):

        qinv = rot.quaternion_inverse([1, 2, 3, 4])

        np.testing.assert_array_almost_equal(qinv, np.array([-1, -2, -3, 4]) / 30)

        np.testing.assert_array_almost_equal(rot.quaternion_multiplication([1, 2, 3, 4], qinv), [0, 0, 0, 1])
        np.testing.assert_array_almost_equal(rot.quaternion_multiplication(qinv, [1, 2, 3, 4]), [0, 0, 0, 1])

        qinv = rot.quaternion_inverse([[1, 2], [2, 3], [3, 4], [4, 5]])

        np.testing.assert_array_almost_equal(qinv.T, [np.array([-1, -2, -3, 4]) / 30,
                                                      np.array([-2, -3, -4, 5]) / 54])

    def test_unit(self):

        q = rot.quaternion_normalize([0.23, 0.45, 0.67, 0.2])

        np.testing.assert_array_almost_equal(rot.quaternion_inverse(q), rot.quaternion_conjugate(q))

    def test_zero(self):

        with self.assertRaises(rot.ZeroNormError) as context:
            rot.quaternion_inverse([0, 0, 0, 0])

        self.assertIn('invert zero quaternion', str(context.exception))


class TestQuaternionDot(TestCase):

    def test_quaternion_dot(self):

        self.assertEqual(rot.quaternion_dot([1, 2, 3, 4], [5, 6, 7, 8]), 70)

        np.testing.assert_array_equal(rot.quaternion_dot([[1, 0], [2, 0], [3, 0], [4, 1]],
                                                         [[5, 0], [6, 0], [7, 0], [8, -1]]), [70, -1])


class TestQuaternionMultiplication(TestCase):

    def test_basis(self):

        i = [1, 0, 0, 0]
        j = [0, 1, 0, 0]
        k = [0, 0, 1, 0]
        one = [0, 0, 0, 1]

        np.testing.assert_array_equal(rot.quaternion_multiplication(i, j), k)
        np.testing.assert_array_equal(rot.quaternion_multiplication(j, k), i)
        np.testing.assert_array_equal(rot.quaternion_multiplication(k, i), j)

        np.testing.assert_array_equal(rot.quaternion_multiplication(j, i), np.negative(k))
        np.testing.assert_array_equal(rot.quaternion_multiplication(i, i), np.negative(one))
        np.testing.assert_array_equal(rot.quaternion_multiplication(one, k), k)

    def test_vectorized(self):

        quat_1 = [[1], [0], [0], [0]]
        quat_2 = [[0], [1], [0], [0]]

        qm = rot.quaternion_multiplication(quat_1, quat_2)

        np.testing.assert_array_equal(qm, [[0], [0], [1], [0]])

        quat_1 = [[1, 0], [0, 1], [0, 0], [0, 0]]
        quat_2 = [[0, 0], [1, 1], [0, 0], [0, 0]]

        qm = rot.quaternion_multiplication(quat_1, quat_2)

        np.testing.assert_array_equal(qm, [[0, 0], [0, 0], [1, 0], [0, -1]])

        # a single quaternion broadcasts against columns
        qm = rot.quaternion_multiplication([1, 0, 0, 0], quat_2)

        np.testing.assert_array_equal(qm, [[0, 0], [0, 0], [1, 1], [0, 0]])

    def test_values(self):

        quat_1 = [np.sqrt(2)/2, 0, 0, np.sqrt(2)/2]
        quat_2 = [0, np.sqrt(2)/2, 0, np.sqrt(2)/2]

        qm = rot.quaternion_multiplication(quat_1, quat_2)

        np.testing.assert_array_almost_equal(qm, [0.5, 0.5, 0.5, 0.5])

        quat_1 = [0.25532186, 0.51064372, 0.76596558, -0.29555113]

        quat_2 = [-0.43199286, -0.53999107, -0.64798929, -0.31922045]

        qm = rot.quaternion_multiplication(quat_1, quat_2)

        np.testing.assert_array_almost_equal(qm, [0.12889493, -0.16885878, 0.02972499, 0.97672373])

    def test_properties(self):

        rng = np.random.default_rng(8675309)

        q1, q2, q3 = rng.normal(size=(3, 4))

        # associative
        np.testing.assert_array_almost_equal(
            rot.quaternion_multiplication(rot.quaternion_multiplication(q1, q2), q3),
            rot.quaternion_multiplication(q1, rot.quaternion_multiplication(q2, q3))
        )

        # not commutative
        self.assertFalse(np.allclose(rot.quaternion_multiplication(q1, q2), rot.quaternion_multiplication(q2, q1)))

        # q q* = (0, 0, 0, |q|^2)
        np.testing.assert_array_almost_equal(rot.quaternion_multiplication(q1, rot.quaternion_conjugate(q1)),
                                             [0, 0, 0, (q1 * q1).sum()])

    def test_precision(self):

        q32 = np.array([1, 0, 0, 0], dtype=np.float32)

        self.assertEqual(rot.quaternion_multiplication(q32, q32).dtype, np.dtype(np.float32))
        self.assertEqual(rot.quaternion_multiplication(q32, [0, 1, 0, 0]).dtype, np.dtype(np.float32))
        self.assertEqual(rot.quaternion_multiplication(q32, np.array([0, 1., 0, 0])).dtype, np.dtype(np.float64))


class TestRotateVector(TestCase):

    def test_rotate_vector(self):

        q = [0, 0, np.sqrt(2)/2, np.sqrt(2)/2]

        np.testing.assert_allclose(rot.rotate_vector(q, [1, 0, 0]), [0, 1, 0], atol=1e-10)
        np.testing.assert_allclose(rot.rotate_vector(q, [0, 1, 0]), [-1, 0, 0], atol=1e-10)
        np.testing.assert_allclose(rot.rotate_vector(q, [0, 0, 1]), [0, 0, 1], atol=1e-10)

    def test_vectorized(self):

        q = [0, 0, np.sqrt(2)/2, np.sqrt(2)/2]

        rotated = rot.rotate_vector(q, np.eye(3))

        np.testing.assert_allclose(rotated, [[0, -1, 0], [1, 0, 0], [0, 0, 1]], atol=1e-10)

        qs = [[0, 1], [0, 0], [np.sqrt(2)/2, 0], [np.sqrt(2)/2, 0]]

        rotated = rot.rotate_vector(qs, [0, 1, 0])

        np.testing.assert_allclose(rotated.T, [[-1, 0, 0], [0, -1, 0]], atol=1e-10)

    def test_precision(self):

        q = np.array([0, 0, np.sqrt(2)/2, np.sqrt(2)/2], dtype=np.float32)

        rotated = rot.rotate_vector(q, [1, 0, 0])

        self.assertEqual(rotated.dtype, np.dtype(np.float32))
        np.testing.assert_allclose(rotated, [0, 1, 0], atol=1e-6)


class TestInterpolationFraction(TestCase):

    def test_interpolation_fraction(self):

        self.assertEqual(rot.interpolation_fraction(0.25, 0, 1), 0.25)
        self.assertEqual(rot.interpolation_fraction(15, 10, 20), 0.5)

        start = datetime(2020, 1, 1)

        self.assertEqual(rot.interpolation_fraction(start + timedelta(hours=6), start, start + timedelta(days=1)),
                         0.25)

        start = pd.Timestamp('2020-01-01')

        self.assertEqual(rot.interpolation_fraction(start + pd.Timedelta(hours=18), start,
                                                    start + pd.Timedelta(days=1)), 0.75)

    def test_bad_types(self):

        with self.assertRaises(TypeError):
            rot.interpolation_fraction(datetime(2020, 1, 1), 0, 1)

    def test_equal_times(self):

        with self.subTest(time_type=float):
            with self.assertRaises(ValueError):
                rot.interpolation_fraction(1.0, 1.0, 1.0)

        with self.subTest(time_type=datetime):
            with self.assertRaises(ValueError):
                rot.interpolation_fraction(datetime(2020, 1, 2), datetime(2020, 1, 1), datetime(2020, 1, 1))

        with self.subTest(function='slerp'):
            with self.assertRaises(ValueError):
                rot.slerp([0, 0, 0, 1], [0, 0, 1, 0], 0.5, time0=3, time1=3)


class TestLERP(TestCase):

    def test_lerp(self):

        q0 = [0, 0, 0, 1]
        q1 = [0, 0, np.sqrt(2)/2, np.sqrt(2)/2]

        np.testing.assert_allclose(rot.lerp(q0, q1, 0), q0)
        np.testing.assert_allclose(rot.lerp(q0, q1, 1), q1)

        qtrue = (np.array(q0) + np.array(q1)) / 2
        qtrue /= np.linalg.norm(qtrue)

        np.testing.assert_allclose(rot.lerp(q0, q1, 0.5), qtrue)
        np.testing.assert_allclose(rot.lerp(q0, q1, 5, time0=0, time1=10), qtrue)

    def test_zero_blend(self):

        with self.assertWarns(RuntimeWarning):
            q = rot.lerp([0, 0, 0, 1], [0, 0, 0, -1], 0.5)

        np.testing.assert_array_equal(q, [0, 0, 0, 0])

    def test_single_quaternions_only(self):

        with self.assertRaises(ValueError):
            rot.lerp([[0], [0], [0], [1]], [0, 0, 0, 1], 0.5)


class TestNLERP(TestCase):

    def test_nlerp(self):

        with self.subTest(input_type=list):
            q0 = [0, 0, 0, 1]
            q1 = [0.5, 0.5, 0.5, 0.5]

            np.testing.assert_allclose(rot.nlerp(q0, q1, 0), q0)
            np.testing.assert_allclose(rot.nlerp(q0, q1, 1), q1)

            qtrue = (np.array(q0) + np.array(q1)) / 2
            qtrue /= np.linalg.norm(qtrue)

            np.testing.assert_allclose(rot.nlerp(q0, q1, 0.5), qtrue)

        with self.subTest(input_type=datetime):
            q0 = np.array([0, 0, 0, 1.])
            q1 = np.array([0.5, 0.5, 0.5, 0.5])

            time0 = datetime(2020, 2, 3, 4, 5, 6)
            time1 = time0 + timedelta(minutes=10)

            qt = rot.nlerp(q0, q1, time0 + timedelta(minutes=5), time0=time0, time1=time1)

            qtrue = (q0 + q1) / 2
            qtrue /= np.linalg.norm(qtrue)

            np.testing.assert_allclose(qt, qtrue)

        with self.subTest(input_type=pd.Timestamp):
            time0 = pd.Timestamp('2020-02-03 04:05:06')
            time1 = time0 + pd.Timedelta(minutes=10)

            qt = rot.nlerp(q0, q1, time0 + pd.Timedelta(minutes=5), time0=time0, time1=time1)

            np.testing.assert_allclose(qt, qtrue)

    def test_zero_blend(self):

        with self.assertRaises(rot.ZeroNormError):
            rot.nlerp([0, 0, 0, 1], [0, 0, 0, -1], 0.5)

    def test_bad_time(self):

        with self.assertRaises(TypeError):
            rot.nlerp([0, 0, 0, 1], [0, 0, 1, 0], 'noon', time0='morning', time1='night')


class TestSLERP(TestCase):

    def test_slerp(self):

        q0 = [0, 0, 0, 1]
        q1 = [0.5, 0.5, 0.5, 0.5]

        np.testing.assert_allclose(rot.slerp(q0, q1, 0), q0, atol=1e-15)
        np.testing.assert_allclose(rot.slerp(q0, q1, 1), q1)

        qtrue = (np.array(q0) + np.array(q1)) / 2
        qtrue /= np.linalg.norm(qtrue)

        np.testing.assert_allclose(rot.slerp(q0, q1, 0.5), qtrue)

        qtrue = (np.array(q0) + qtrue) / 2
        qtrue /= np.linalg.norm(qtrue)

        np.testing.assert_allclose(rot.slerp(q0, q1, 0.25), qtrue)

        # comes from ODTBX matlab function
        qtrue = [0.424985851398278, 0.424985851398278, 0.424985851398278, 0.676875969682661]

        np.testing.assert_allclose(rot.slerp(q0, q1, 0.79), qtrue)

        q0 = np.array([0.23, 0.45, 0.67, 0.2])
        q0 /= np.linalg.norm(q0)
        q1 = np.array([-0.3, 0.2, 0.6, 0.33])
        q1 /= np.linalg.norm(q1)

        np.testing.assert_allclose(rot.slerp(q0, q1, 0), q0)
        np.testing.assert_allclose(rot.slerp(q0, q1, 1), q1)

        qtrue = (q0 + q1) / 2
        qtrue /= np.linalg.norm(qtrue)

        np.testing.assert_allclose(rot.slerp(q0, q1, 0.5), qtrue)

        qtrue = (q0 + qtrue) / 2
        qtrue /= np.linalg.norm(qtrue)

        np.testing.assert_allclose(rot.slerp(q0, q1, 0.25), qtrue)

    def test_shortest_path(self):

        q0 = np.array([0, 0, 0, 1.])
        q1 = np.array([0.5, 0.5, 0.5, 0.5])

        np.testing.assert_allclose(rot.slerp(q0, -q1, 0.3), rot.slerp(q0, q1, 0.3))
        np.testing.assert_allclose(rot.slerp(q0, -q1, 1), q1)

    def test_near_parallel(self):

        q0 = [0, 0, 0, 1]
        q1 = [0, 0, np.sin(0.005), np.cos(0.005)]

        np.testing.assert_array_equal(rot.slerp(q0, q1, 0.4), rot.lerp(q0, q1, 0.4))

    def test_vanishing_sine(self):

        # with the linear fallback disabled identical inputs hit the sine guard
        q0 = [0, 0, 0, 1]

        np.testing.assert_array_equal(rot.slerp(q0, q0, 0.5, linear_threshold=1.0), q0)

    def test_times(self):

        q0 = [0, 0, 0, 1]
        q1 = [0.5, 0.5, 0.5, 0.5]

        time0 = datetime(2021, 5, 6)
        time1 = time0 + timedelta(seconds=100)

        np.testing.assert_allclose(rot.slerp(q0, q1, time0 + timedelta(seconds=79), time0=time0, time1=time1),
                                   [0.424985851398278, 0.424985851398278, 0.424985851398278, 0.676875969682661])

    def test_precision(self):

        q0 = np.array([0, 0, 0, 1], dtype=np.float32)
        q1 = np.array([0.5, 0.5, 0.5, 0.5], dtype=np.float32)

        qt = rot.slerp(q0, q1, 0.5)

        self.assertEqual(qt.dtype, np.dtype(np.float32))

        qtrue = (q0 + q1) / 2
        qtrue /= np.linalg.norm(qtrue)

        np.testing.assert_allclose(qt, qtrue, rtol=1e-5)
