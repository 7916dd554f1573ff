from .modules.client.bucketclient import BucketClient
from .modules.client.cosclient import CosClient
from .modules.client.objectclient import ObjectClient
from .modules.client.signer import Signer
from .modules.client.stsclient import StsClient
from .modules.client.stssigner import StsSigner
from .modules.configuration.confighelper import ConfigHelper
from .modules.coscredentials import COSCredentials
from .modules.cosdata import BucketAcl
from .modules.errors import CosError, ErrorKind, advice_for
from .modules.policy import Policy, Statement

__all__ = [
    "BucketAcl",
    "BucketClient",
    "ConfigHelper",
    "COSCredentials",
    "CosClient",
    "CosError",
    "ErrorKind",
    "ObjectClient",
    "Policy",
    "Signer",
    "Statement",
    "StsClient",
    "StsSigner",
    "advice_for",
]
