"""
Typings shaped for the ethers.js contract API.

Constant methods resolve to their value, everything else resolves to a
ContractTransaction. Events become filter factories over the indexed inputs.
"""

from typing import List

from ..base import BaseGenerator
from ..naming import parameter_name
from ..type_converter import TypeConverter
from ...abi.abi_nodes import AbiItem, AbiItemType


ETHERS_PREAMBLE = """\
import {{ ContractTransaction }} from 'ethers';
import {{ Arrayish, BigNumber, BigNumberish, Interface }} from 'ethers/utils';
import {{ EthersContractContext }} from 'ethereum-abi-types-generator';

export type ContractContext = EthersContractContext<
  {abi_name},
  {abi_name}EventsContext,
  {abi_name}Events
>;

export declare type EventFilter = {{
  address?: string;
  topics?: Array<string>;
  fromBlock?: string | number;
  toBlock?: string | number;
}};

export interface ContractTransactionOverrides {{
  gasLimit?: number;
  gasPrice?: BigNumber | string | number | Promise<any>;
  nonce?: number;
  value?: BigNumber | string | number | Promise<any>;
  chainId?: number;
}}

export interface ContractCallOverrides {{
  from?: string;
  gasLimit?: number;
}}
"""


class EthersFactory(BaseGenerator):
    """Builds the ethers flavoured parts of the typings."""

    def __init__(self, ctx, type_converter: TypeConverter):
        super().__init__(ctx)
        self._type_converter = type_converter

    def build_provider_preamble(self, abi_name: str) -> str:
        return ETHERS_PREAMBLE.format(abi_name=abi_name)

    def wrap_return_type(self, inner_type: str, item: AbiItem) -> str:
        if item.is_constant:
            return f'Promise<{inner_type}>'
        return 'Promise<ContractTransaction>'

    def build_event_properties(self, items: List[AbiItem]) -> List[str]:
        properties = []
        for item in items:
            if item.type != AbiItemType.EVENT:
                continue

            params = []
            for i, abi_input in enumerate(item.inputs or []):
                if abi_input is None or not abi_input.indexed:
                    continue
                ts_type = self._type_converter.solidity_type_to_ts(abi_input.type)
                params.append(f'{parameter_name(abi_input.name, i)}?: {ts_type} | null')

            properties.append(f'{item.name}({", ".join(params)}): EventFilter;')
        return properties
