import numpy as np

def identity_activation(z):
    return z

def clamped_activation(z):
    return np.clip(z, -1.0, 1.0)

def relu_activation(z):
    return np.maximum(0.0, z)

def sigmoid_activation(z):
    Z = np.clip(z, -500, 500)   # to prevent overflow when calculating exp
    return 1.0 / (1.0 + np.exp(-Z))

def steep_sigmoid_activation(z):
    K = 10
    Z = K * z
    Z = np.clip(Z, -100, 100)
    return 1.0 / (1.0 + np.exp(-Z))

def tanh_activation(z):
    return np.tanh(z)

def sin_activation(z):
    return np.sin(z)

def abs_activation(z):
    return np.abs(z)

activations = {
    "identity"     : identity_activation,
    "linear"       : identity_activation,
    "clamped"      : clamped_activation,
    "relu"         : relu_activation,
    "sigmoid"      : sigmoid_activation,
    "steep_sigmoid": steep_sigmoid_activation,
    "tanh"         : tanh_activation,
    "sin"          : sin_activation,
    "abs"          : abs_activation
    }
